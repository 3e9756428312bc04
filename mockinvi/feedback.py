from typing import Any, Dict, List, Optional, Sequence

from .rubrics import DEFAULT_IDEAL_ANSWER, NO_ANSWER
from .schemas import AggregateStatistics, EvaluationBatch, EvaluationRecord, InterviewSession

SESSION_GRADES = [
    (9.0, "A+"),
    (8.0, "A"),
    (7.0, "B+"),
    (6.0, "B"),
    (5.0, "C+"),
    (4.0, "C"),
    (3.0, "D"),
]

FALLBACK_GRADES = [
    (8.0, "A"),
    (7.0, "B+"),
    (6.0, "B"),
    (5.0, "C+"),
    (4.0, "C"),
]


def _lookup(score: float, table, floor: str) -> str:
    for cutoff, grade in table:
        if score >= cutoff:
            return grade
    return floor


def grade_for_score(score: float) -> str:
    """Session-level letter grade for an average on the 0-10 scale."""
    return _lookup(score, SESSION_GRADES, "F")


def fallback_grade(score: float) -> str:
    """Grade table used by the heuristic fallback aggregate."""
    return _lookup(score, FALLBACK_GRADES, "D")


def score_tier(score: float) -> str:
    if score >= 8:
        return "strong"
    if score >= 6:
        return "moderate"
    return "weak"


def average_score(evaluations: Sequence[EvaluationRecord]) -> float:
    if not evaluations:
        return 0.0
    return sum(e.score for e in evaluations) / len(evaluations)


def unavailable_result(
    questions: Sequence[str],
    user_answers: Sequence[Optional[str]],
    ideal_answers: Sequence[Optional[str]],
) -> EvaluationBatch:
    """All-zero placeholder shown when no evaluation at all could be produced."""
    evaluations = []
    for i, _ in enumerate(questions):
        evaluations.append(EvaluationRecord(
            question_number=i + 1,
            user_answer=str((user_answers[i] if i < len(user_answers) else None) or NO_ANSWER),
            ideal_answer=str((ideal_answers[i] if i < len(ideal_answers) else None) or DEFAULT_IDEAL_ANSWER),
            score=0.0,
            remarks="Evaluation failed. Please try again.",
            improvement_tips=["Evaluation service temporarily unavailable. Please try again."],
        ))
    stats = AggregateStatistics(
        average_score=0.0,
        total_questions=len(questions),
        strengths=["Completed the interview"],
        critical_weaknesses=["Evaluation failed"],
        overall_grade="N/A",
        harsh_but_helpful_feedback="Evaluation failed. Please try again.",
        recommendation="Please retry the evaluation process.",
    )
    return EvaluationBatch(evaluations=evaluations, overall_statistics=stats, source="unavailable")


def summarize_report(session: InterviewSession) -> Dict[str, Any]:
    """Report view of a session. The average is recomputed from the stored records."""
    avg = average_score(session.evaluations)
    per_question: List[Dict[str, Any]] = []
    for i, record in enumerate(session.evaluations):
        per_question.append({
            "question_number": record.question_number,
            "question": session.questions[i] if i < len(session.questions) else "",
            "user_answer": record.user_answer,
            "ideal_answer": record.ideal_answer,
            "score": record.score,
            "tier": score_tier(record.score),
            "remarks": record.remarks,
            "score_breakdown": record.score_breakdown.model_dump(),
            "improvement_tips": list(record.improvement_tips),
        })
    return {
        "session_id": session.id,
        "interview_type": session.interview_type.value,
        "status": session.session_status.value,
        "total_questions": len(session.questions),
        "overall_score": round(avg, 2),
        "grade": grade_for_score(avg),
        "tier": score_tier(avg),
        "completed_at": session.completed_at.isoformat() if session.completed_at else None,
        "per_question": per_question,
    }
