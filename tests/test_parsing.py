import json

import pytest

from mockinvi.errors import MalformedResponseError
from mockinvi.parsing import Parsed, ParseError, parse_evaluation_response, strip_code_fences
from mockinvi.rubrics import DEFAULT_REMARK, DEFAULT_TIP

from payloads import remote_payload


def test_strip_code_fences():
    assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fences('```\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fences('  {"a": 1}  ') == '{"a": 1}'


def test_parse_fenced_response():
    result = parse_evaluation_response(remote_payload([7, 5], fenced=True))
    assert isinstance(result, Parsed)
    batch = result.unwrap()
    assert [e.score for e in batch.evaluations] == [7, 5]
    assert batch.overall_statistics.strengths == ["Good structure"]
    assert batch.source == "remote"


def test_missing_breakdown_becomes_zeros():
    body = json.loads(remote_payload([6]))
    del body["evaluations"][0]["score_breakdown"]
    batch = parse_evaluation_response(json.dumps(body)).unwrap()
    breakdown = batch.evaluations[0].score_breakdown
    assert (breakdown.correctness, breakdown.completeness, breakdown.depth, breakdown.clarity) == (0, 0, 0, 0)


def test_missing_fields_get_defaults():
    text = json.dumps({
        "evaluations": [{"improvement_tips": "not a list"}],
        "overall_statistics": {},
    })
    batch = parse_evaluation_response(text, user_answers=["mine"], ideal_answers=["ideal"]).unwrap()
    record = batch.evaluations[0]
    assert record.score == 0
    assert record.remarks == DEFAULT_REMARK
    assert record.improvement_tips == [DEFAULT_TIP]
    assert record.question_number == 1
    assert record.user_answer == "mine"
    assert record.ideal_answer == "ideal"
    assert batch.overall_statistics.total_questions == 1


def test_partial_breakdown_fills_missing_dimensions():
    body = json.loads(remote_payload([6]))
    body["evaluations"][0]["score_breakdown"] = {"correctness": 9}
    record = parse_evaluation_response(json.dumps(body)).unwrap().evaluations[0]
    assert record.score_breakdown.correctness == 9
    assert record.score_breakdown.depth == 0


def test_scores_are_clamped_to_scale():
    body = json.loads(remote_payload([12, -3]))
    body["evaluations"][0]["score_breakdown"]["depth"] = 40
    batch = parse_evaluation_response(json.dumps(body)).unwrap()
    assert [e.score for e in batch.evaluations] == [10, 0]
    assert batch.evaluations[0].score_breakdown.depth == 10


def test_out_of_range_average_is_replaced_by_mean():
    batch = parse_evaluation_response(remote_payload([4, 6], average=42)).unwrap()
    assert batch.overall_statistics.average_score == pytest.approx(5.0)


def test_truncated_json_is_a_parse_error():
    text = remote_payload([7, 5])[:40]
    result = parse_evaluation_response(text)
    assert isinstance(result, ParseError)
    with pytest.raises(MalformedResponseError):
        result.unwrap()


@pytest.mark.parametrize("body", [
    {"overall_statistics": {}},
    {"evaluations": [], "overall_statistics": "none"},
    {"evaluations": ["text"], "overall_statistics": {}},
    ["not", "an", "object"],
])
def test_wrong_top_level_shape(body):
    assert isinstance(parse_evaluation_response(json.dumps(body)), ParseError)


@pytest.mark.parametrize("literal", ["NaN", '"nan"', "Infinity", '"-inf"'])
def test_non_finite_numbers_become_zero(literal):
    text = ('{"evaluations": [{"score": %s, "remarks": "r", "score_breakdown": {"correctness": %s, "depth": 6}}],'
            ' "overall_statistics": {"average_score": %s}}' % (literal, literal, literal))
    batch = parse_evaluation_response(text).unwrap()
    record = batch.evaluations[0]
    assert record.score == 0
    assert record.score_breakdown.correctness == 0
    assert record.score_breakdown.depth == 6
    assert batch.overall_statistics.average_score == 0
