import json
import logging
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from openai import OpenAI, OpenAIError

from . import fallback
from .config import EvaluatorConfig
from .errors import InsufficientDataError, RemoteServiceError
from .parsing import ParseError, parse_evaluation_response
from .rubrics import (CONTEXT_LIMIT, DEFAULT_IDEAL_ANSWER, EVALUATION_RUBRIC, NO_ANSWER,
                      is_placeholder_answer)
from .schemas import EvaluationBatch

logger = logging.getLogger(__name__)

Completion = Callable[[str, EvaluatorConfig], str]

_clients: Dict[Tuple[str, Optional[float]], OpenAI] = {}

RESPONSE_SCHEMA = {
    "evaluations": [
        {
            "question_number": 1,
            "user_answer": "actual user answer",
            "ideal_answer": "ideal answer text",
            "score": 7.5,
            "remarks": "Detailed feedback on the answer",
            "score_breakdown": {"correctness": 8, "completeness": 7, "depth": 7, "clarity": 8},
            "improvement_tips": ["Specific tip 1", "Specific tip 2"],
        }
    ],
    "overall_statistics": {
        "average_score": 7.2,
        "total_questions": 1,
        "strengths": ["Key strength 1", "Key strength 2"],
        "critical_weaknesses": ["Weakness 1", "Weakness 2"],
        "overall_grade": "B+",
        "harsh_but_helpful_feedback": "Direct feedback",
        "recommendation": "Actionable recommendation",
    },
}


def _client_openai(config: EvaluatorConfig) -> OpenAI:
    if not config.api_key:
        raise RemoteServiceError("OPENAI_API_KEY not set; configure it in admin settings or set MOCK_MODE=1")
    cache_key = (config.api_key, config.timeout)
    if cache_key not in _clients:
        kwargs = {"api_key": config.api_key}
        if config.timeout is not None:
            kwargs["timeout"] = config.timeout
        _clients[cache_key] = OpenAI(**kwargs)
    return _clients[cache_key]


def call_openai(prompt: str, config: EvaluatorConfig, temperature: Optional[float] = None,
                max_tokens: Optional[int] = None) -> str:
    client = _client_openai(config)
    try:
        resp = client.chat.completions.create(
            model=config.model,
            messages=[{"role": "system", "content": prompt}],
            temperature=config.temperature if temperature is None else temperature,
            max_tokens=max_tokens or config.max_tokens,
        )
    except OpenAIError as exc:
        raise RemoteServiceError(f"text generation failed: {exc}") from exc
    content = resp.choices[0].message.content if resp.choices else None
    if not content:
        raise RemoteServiceError("No evaluation content generated")
    return content


def align_lengths(questions: Sequence[str], user_answers: Sequence[Optional[str]],
                  ideal_answers: Sequence[Optional[str]]) -> Tuple[List[str], List[Optional[str]], List[Optional[str]]]:
    n = min(len(questions), len(user_answers), len(ideal_answers))
    if not len(questions) == len(user_answers) == len(ideal_answers):
        logger.warning("Length mismatch (questions=%d, answers=%d, ideal=%d); evaluating first %d",
                       len(questions), len(user_answers), len(ideal_answers), n)
    return list(questions[:n]), list(user_answers[:n]), list(ideal_answers[:n])


def build_evaluation_prompt(questions: Sequence[str], user_answers: Sequence[Optional[str]],
                            ideal_answers: Sequence[Optional[str]], context: Optional[str] = None) -> str:
    criteria = EVALUATION_RUBRIC["criteria"]
    rubric_lines = "\n".join(
        f"{i}. {name.upper()} - {rule['description']}" for i, (name, rule) in enumerate(criteria.items(), 1)
    )
    context_block = ""
    if context and context.strip():
        context_block = f"RESUME CONTEXT:\n{context[:CONTEXT_LIMIT]}...\n\n"

    blocks = []
    for i, question in enumerate(questions):
        blocks.append(
            f"Question {i + 1}: {question}\n"
            f"Ideal Answer: {ideal_answers[i] or DEFAULT_IDEAL_ANSWER}\n"
            f"User Answer: {user_answers[i] or NO_ANSWER}\n---"
        )
    schema = dict(RESPONSE_SCHEMA)
    schema["overall_statistics"] = dict(RESPONSE_SCHEMA["overall_statistics"], total_questions=len(questions))

    return f"""You are an expert interview evaluator. Evaluate each user answer against the ideal answer using {len(criteria)} metrics (0-10):

{rubric_lines}

{context_block}Questions and Answers to Evaluate:
{chr(10).join(blocks)}

Return JSON in this EXACT format:
{json.dumps(schema, indent=2)}

Important:
- Provide realistic scores (not all 5/10)
- Give specific, actionable feedback
- Base scores on actual answer quality
- Score every dimension independently on the 0-10 scale
- If answer is "No answer provided" or "Question skipped", give low scores (1-3)
- Use STAR method recommendations when appropriate
"""


def _mock_completion(user_answers: Sequence[Optional[str]], ideal_answers: Sequence[Optional[str]]) -> str:
    evaluations = []
    for i, answer in enumerate(user_answers):
        score = 2.0 if is_placeholder_answer(answer) else 6.5
        evaluations.append({
            "question_number": i + 1,
            "user_answer": answer or NO_ANSWER,
            "ideal_answer": ideal_answers[i] or DEFAULT_IDEAL_ANSWER,
            "score": score,
            "remarks": "Solid but missing metrics.",
            "score_breakdown": {"correctness": score, "completeness": score,
                                "depth": score, "clarity": score},
            "improvement_tips": ["Quantify the outcome"],
        })
    return json.dumps({
        "evaluations": evaluations,
        "overall_statistics": {
            "average_score": sum(e["score"] for e in evaluations) / len(evaluations),
            "total_questions": len(evaluations),
            "strengths": ["Clear structure"],
            "critical_weaknesses": ["Missing metrics"],
            "overall_grade": "B",
            "harsh_but_helpful_feedback": "Solid but missing metrics.",
            "recommendation": "Back every claim with a number.",
        },
    })


def _enforce_skip_policy(batch: EvaluationBatch, user_answers: Sequence[Optional[str]]) -> EvaluationBatch:
    records = []
    for record, answer in zip(batch.evaluations, user_answers):
        if is_placeholder_answer(answer) and not 1 <= record.score <= 3:
            record = record.model_copy(update={"score": min(3.0, max(1.0, record.score))})
        records.append(record)
    return batch.model_copy(update={"evaluations": records})


def bulk_evaluate_answers(
    questions: Sequence[str],
    user_answers: Sequence[Optional[str]],
    ideal_answers: Sequence[Optional[str]],
    config: EvaluatorConfig,
    context: Optional[str] = None,
    complete: Optional[Completion] = None,
    rng=None,
) -> EvaluationBatch:
    """Evaluate every answer in one request; degrade to heuristic scoring on failure.

    Only ``InsufficientDataError`` escapes. Remote errors and unusable
    responses yield the fallback batch.
    """
    if not questions or not user_answers or not ideal_answers:
        raise InsufficientDataError("Missing required data for evaluation", details={
            "questions": len(questions), "answers": len(user_answers), "ideal_answers": len(ideal_answers),
        })
    questions, user_answers, ideal_answers = align_lengths(questions, user_answers, ideal_answers)

    if complete is None:
        if config.mock_mode:
            complete = lambda prompt, cfg: _mock_completion(user_answers, ideal_answers)
        else:
            complete = call_openai

    prompt = build_evaluation_prompt(questions, user_answers, ideal_answers, context)
    try:
        raw = complete(prompt, config)
    except RemoteServiceError as exc:
        logger.warning("Evaluation request failed, using heuristic scoring: %s", exc)
        return fallback.score_batch(questions, user_answers, ideal_answers, rng=rng)

    outcome = parse_evaluation_response(raw, user_answers=user_answers, ideal_answers=ideal_answers)
    if isinstance(outcome, ParseError):
        logger.warning("Malformed evaluation response, using heuristic scoring: %s", outcome.reason)
        return fallback.score_batch(questions, user_answers, ideal_answers, rng=rng)

    batch = outcome.batch
    if len(batch.evaluations) != len(questions):
        logger.warning("Evaluator returned %d evaluations for %d questions, using heuristic scoring",
                       len(batch.evaluations), len(questions))
        return fallback.score_batch(questions, user_answers, ideal_answers, rng=rng)
    return _enforce_skip_policy(batch, user_answers)
