import uuid

import pytest

from mockinvi.identity import consistent_uuid


def test_same_id_same_uuid():
    assert consistent_uuid("google-oauth2|1234") == consistent_uuid("google-oauth2|1234")
    assert consistent_uuid("alice") != consistent_uuid("bob")


def test_result_is_uuid():
    assert uuid.UUID(consistent_uuid("alice")).version == 5


@pytest.mark.parametrize("value", ["", "   ", None])
def test_blank_id_rejected(value):
    with pytest.raises(ValueError):
        consistent_uuid(value)
