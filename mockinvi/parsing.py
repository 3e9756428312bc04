"""Turn raw text from the text-generation endpoint into an ``EvaluationBatch``.

The generator is not guaranteed to fill every field, so normalization runs on
every successful parse. The result is tagged: ``Parsed`` or ``ParseError``.
"""

from __future__ import annotations

import json
import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Union

from pydantic import ValidationError

from .errors import MalformedResponseError
from .feedback import grade_for_score
from .rubrics import DEFAULT_REMARK, DEFAULT_TIP, DIMENSIONS
from .schemas import EvaluationBatch

logger = logging.getLogger(__name__)

_FENCE_OPEN = re.compile(r"^```[a-zA-Z]*\s*\n?")
_FENCE_CLOSE = re.compile(r"\n?```\s*$")


@dataclass(frozen=True)
class Parsed:
    batch: EvaluationBatch

    def unwrap(self) -> EvaluationBatch:
        return self.batch


@dataclass(frozen=True)
class ParseError:
    reason: str

    def unwrap(self) -> EvaluationBatch:
        raise MalformedResponseError(self.reason)


ParseResult = Union[Parsed, ParseError]


def strip_code_fences(text: str) -> str:
    clean = (text or "").strip()
    if clean.startswith("```"):
        clean = _FENCE_OPEN.sub("", clean, count=1)
        clean = _FENCE_CLOSE.sub("", clean, count=1)
    return clean.strip()


def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    # NaN and inf count as non-numeric.
    return number if math.isfinite(number) else None


def _clamp(value: float, low: float = 0.0, high: float = 10.0) -> float:
    return max(low, min(high, value))


def _pick(seq: Optional[Sequence[Optional[str]]], index: int) -> str:
    if seq is None or index >= len(seq):
        return ""
    return seq[index] or ""


def _normalize_entry(entry: Dict[str, Any], index: int, user_answers, ideal_answers) -> Dict[str, Any]:
    score = _number(entry.get("score"))
    breakdown = entry.get("score_breakdown")
    if not isinstance(breakdown, dict):
        breakdown = {}
    remarks = entry.get("remarks")
    tips = entry.get("improvement_tips")
    if not isinstance(tips, list) or not tips:
        tips = [DEFAULT_TIP]

    number = entry.get("question_number")
    if not isinstance(number, int) or isinstance(number, bool) or number < 1:
        number = index + 1

    return {
        "question_number": number,
        "user_answer": str(entry.get("user_answer") or _pick(user_answers, index)),
        "ideal_answer": str(entry.get("ideal_answer") or _pick(ideal_answers, index)),
        "score": _clamp(score if score is not None else 0.0),
        "remarks": str(remarks) if remarks else DEFAULT_REMARK,
        "score_breakdown": {
            dim: _clamp(_number(breakdown.get(dim)) or 0.0) for dim in DIMENSIONS
        },
        "improvement_tips": [str(t) for t in tips],
    }


def _string_list(value: Any) -> list:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [str(v) for v in value]
    return []


def _normalize_statistics(stats: Dict[str, Any], evaluations) -> Dict[str, Any]:
    mean = sum(e["score"] for e in evaluations) / len(evaluations) if evaluations else 0.0
    average = _number(stats.get("average_score"))
    if average is None or not 0 <= average <= 10:
        logger.warning("Remote average_score %r unusable, using mean of evaluations %.2f",
                       stats.get("average_score"), mean)
        average = mean

    total = stats.get("total_questions")
    if not isinstance(total, int) or isinstance(total, bool) or total < 0:
        total = len(evaluations)

    return {
        "average_score": average,
        "total_questions": total,
        "strengths": _string_list(stats.get("strengths")),
        "critical_weaknesses": _string_list(stats.get("critical_weaknesses")),
        "overall_grade": str(stats.get("overall_grade") or grade_for_score(mean)),
        "harsh_but_helpful_feedback": str(stats.get("harsh_but_helpful_feedback") or ""),
        "recommendation": str(stats.get("recommendation") or ""),
    }


def parse_evaluation_response(
    text: str,
    user_answers: Optional[Sequence[Optional[str]]] = None,
    ideal_answers: Optional[Sequence[Optional[str]]] = None,
) -> ParseResult:
    """Parse and normalize a bulk-evaluation response. Never raises on bad content."""
    clean = strip_code_fences(text)
    try:
        data = json.loads(clean)
    except (TypeError, ValueError) as exc:
        return ParseError(f"response is not valid JSON: {exc}")

    if not isinstance(data, dict):
        return ParseError("response is not a JSON object")
    raw_evaluations = data.get("evaluations")
    if not isinstance(raw_evaluations, list):
        return ParseError("missing evaluations array")
    raw_stats = data.get("overall_statistics")
    if not isinstance(raw_stats, dict):
        return ParseError("missing overall_statistics object")

    evaluations = []
    for i, entry in enumerate(raw_evaluations):
        if not isinstance(entry, dict):
            return ParseError(f"evaluation {i + 1} is not an object")
        evaluations.append(_normalize_entry(entry, i, user_answers, ideal_answers))

    try:
        batch = EvaluationBatch(
            evaluations=evaluations,
            overall_statistics=_normalize_statistics(raw_stats, evaluations),
            source="remote",
        )
    except ValidationError as exc:
        return ParseError(f"evaluation schema mismatch: {exc.error_count()} error(s)")
    return Parsed(batch)
