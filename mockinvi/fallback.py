"""Heuristic scoring used when the remote evaluator is unavailable.

Answers are bucketed by presence and length; a score is drawn inside the
bucket with a little jitter. Pass a seeded ``random.Random`` for repeatable
results.
"""

import random
from enum import Enum
from typing import Optional, Sequence

from .feedback import fallback_grade
from .rubrics import NO_ANSWER, is_placeholder_answer
from .schemas import AggregateStatistics, EvaluationBatch, EvaluationRecord, ScoreBreakdown

SHORT_ANSWER_CHARS = 50
JITTER = 0.75
FALLBACK_IDEAL_ANSWER = "Professional response expected with specific examples"


class AnswerBucket(Enum):
    NONE = (1, 2)
    SHORT = (3, 5)
    SUBSTANTIVE = (5, 8)

    @property
    def low(self) -> int:
        return self.value[0]

    @property
    def high(self) -> int:
        return self.value[1]


def classify_answer(answer: Optional[str]) -> AnswerBucket:
    if is_placeholder_answer(answer):
        return AnswerBucket.NONE
    if len(str(answer)) < SHORT_ANSWER_CHARS:
        return AnswerBucket.SHORT
    return AnswerBucket.SUBSTANTIVE


def _breakdown(bucket: AnswerBucket, base: int) -> ScoreBreakdown:
    if bucket is AnswerBucket.NONE:
        return ScoreBreakdown(correctness=1, completeness=1, depth=1, clarity=2)
    return ScoreBreakdown(
        correctness=base,
        completeness=max(1, base - 1),
        depth=max(1, base - 0.5),
        clarity=base,
    )


def score_answer(index: int, answer: Optional[str], ideal_answer: Optional[str], rng=None) -> EvaluationRecord:
    answer = None if answer is None else str(answer)
    rng = rng or random
    bucket = classify_answer(answer)
    base = rng.randint(bucket.low, bucket.high)
    score = base + rng.uniform(-JITTER, JITTER)
    score = round(max(bucket.low, min(bucket.high, score)), 2)

    answered = bucket is not AnswerBucket.NONE
    if answered:
        remarks = ("Answer provided but could benefit from more specific examples "
                   "and structured approach (STAR method)")
        tips = [
            "Use the STAR method (Situation, Task, Action, Result)",
            "Include specific metrics and quantifiable outcomes",
            "Provide more context about your role and responsibilities",
        ]
    else:
        remarks = "No answer provided. This question required a detailed response with examples."
        tips = [
            "Always attempt to answer every question",
            "If unsure, provide your best thoughtful response",
            "Use relevant examples from your experience",
        ]

    return EvaluationRecord(
        question_number=index + 1,
        user_answer=answer if answered else ((answer or "").strip() or NO_ANSWER),
        ideal_answer=ideal_answer or FALLBACK_IDEAL_ANSWER,
        score=score,
        remarks=remarks,
        score_breakdown=_breakdown(bucket, base),
        improvement_tips=tips,
    )


def score_batch(
    questions: Sequence[str],
    user_answers: Sequence[Optional[str]],
    ideal_answers: Sequence[Optional[str]],
    rng=None,
) -> EvaluationBatch:
    evaluations = []
    for i, _ in enumerate(questions):
        answer = user_answers[i] if i < len(user_answers) else None
        ideal = ideal_answers[i] if i < len(ideal_answers) else None
        evaluations.append(score_answer(i, answer, ideal, rng=rng))

    avg = sum(e.score for e in evaluations) / len(evaluations) if evaluations else 0.0
    stats = AggregateStatistics(
        average_score=round(avg, 1),
        total_questions=len(questions),
        strengths=[
            "Participated in the complete interview process",
            "Demonstrated engagement with the questions",
        ],
        critical_weaknesses=[
            "Need more detailed and specific responses",
            "Could improve answer structure and depth",
        ],
        overall_grade=fallback_grade(avg),
        harsh_but_helpful_feedback=("Your responses need more depth and specific examples. "
                                    "Focus on quantifiable achievements and structured storytelling."),
        recommendation=("Practice the STAR method and prepare specific examples with measurable "
                        "outcomes before your next interview."),
    )
    return EvaluationBatch(evaluations=evaluations, overall_statistics=stats, source="fallback")
