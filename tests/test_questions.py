import json

import pytest

from mockinvi.errors import InsufficientDataError, RemoteServiceError
from mockinvi.questions import (FALLBACK_ANALYSIS, fallback_question_set, generate_question_set,
                                parse_question_set)
from mockinvi.schemas import InterviewCategory


def _reply(count, analysis=None):
    body = {
        "questions": [f"Question {i}?" for i in range(1, count + 1)],
        "ideal_answers": [f"Ideal {i}." for i in range(1, count + 1)],
    }
    if analysis is not None:
        body["analysis"] = analysis
    return json.dumps(body)


def test_generated_questions(offline_config):
    prompts = []

    def complete(prompt, config):
        prompts.append(prompt)
        return _reply(3)

    result = generate_question_set(InterviewCategory.BASIC_HR_TECHNICAL, 3, offline_config, complete=complete)
    assert result.questions == ["Question 1?", "Question 2?", "Question 3?"]
    assert len(result.ideal_answers) == 3
    assert result.analysis is None
    assert "Generate 3 professional interview questions" in prompts[0]


def test_role_prompt_names_role(offline_config):
    prompts = []

    def complete(prompt, config):
        prompts.append(prompt)
        return f"```json\n{_reply(2)}\n```"

    result = generate_question_set("role_based", 2, offline_config, job_role="Data Engineer", complete=complete)
    assert len(result.questions) == 2
    assert "Data Engineer position" in prompts[0]


def test_resume_set_carries_analysis(offline_config):
    analysis = {"skills": ["SQL"], "suggested_role": "Analyst", "strengths": [], "areas_to_improve": [],
                "suggestions": "More numbers."}
    result = generate_question_set(InterviewCategory.RESUME_BASED, 2, offline_config,
                                   resume_text="Analyst at Acme, SQL and dashboards",
                                   complete=lambda prompt, config: _reply(2, analysis))
    assert result.analysis.suggested_role == "Analyst"


@pytest.mark.parametrize("category,kwargs", [
    (InterviewCategory.BASIC_HR_TECHNICAL, {"question_count": 0}),
    (InterviewCategory.ROLE_BASED, {"question_count": 3, "job_role": "  "}),
    (InterviewCategory.RESUME_BASED, {"question_count": 3, "resume_text": ""}),
])
def test_invalid_requests(offline_config, category, kwargs):
    count = kwargs.pop("question_count")
    with pytest.raises(InsufficientDataError):
        generate_question_set(category, count, offline_config, complete=lambda p, c: _reply(3), **kwargs)


def test_unusable_reply_uses_fallback(offline_config, caplog):
    result = generate_question_set(InterviewCategory.BASIC_HR_TECHNICAL, 4, offline_config,
                                   complete=lambda p, c: "Sorry, I can't help with that.")
    assert len(result.questions) == 4
    assert result.questions[0].startswith("Tell me about a time")
    assert "using fallback questions" in caplog.text


def test_transport_error_propagates(offline_config):
    def complete(prompt, config):
        raise RemoteServiceError("connection reset")

    with pytest.raises(RemoteServiceError):
        generate_question_set(InterviewCategory.BASIC_HR_TECHNICAL, 3, offline_config, complete=complete)


def test_mock_mode_uses_fixed_questions(mock_config):
    result = generate_question_set(InterviewCategory.ROLE_BASED, 5, mock_config, job_role="QA Lead")
    assert len(result.questions) == 5
    assert all("{role}" not in q for q in result.questions)
    assert "QA Lead" in result.questions[0]


def test_fallback_sets():
    resume = fallback_question_set(InterviewCategory.RESUME_BASED, 20)
    assert len(resume.questions) == 10
    assert resume.analysis == FALLBACK_ANALYSIS
    assert len(fallback_question_set(InterviewCategory.BASIC_HR_TECHNICAL, 2).questions) == 2


@pytest.mark.parametrize("text", [
    "not json",
    "[]",
    json.dumps({"questions": [], "ideal_answers": []}),
    json.dumps({"questions": "one", "ideal_answers": []}),
])
def test_parse_question_set_rejects(text):
    assert parse_question_set(text, InterviewCategory.BASIC_HR_TECHNICAL) is None


def test_resume_reply_without_analysis_rejected():
    assert parse_question_set(_reply(2), InterviewCategory.RESUME_BASED) is None
