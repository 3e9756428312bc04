import uuid

# Fixed namespace so the same external id maps to the same UUID across processes.
USER_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, "https://mockinvi.app/users")


def consistent_uuid(external_id: str) -> str:
    """Stable UUID string for an identifier issued by an external auth provider."""
    if not external_id or not str(external_id).strip():
        raise ValueError("external_id must be a non-empty string")
    return str(uuid.uuid5(USER_NAMESPACE, str(external_id).strip()))
