"""Typed records exchanged by the evaluation pipeline.

The JSON shape returned by the text-generation endpoint maps onto
``EvaluationRecord`` and ``AggregateStatistics``; ``InterviewSession`` is the
persisted record a session store hands back.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class InterviewCategory(str, Enum):
    BASIC_HR_TECHNICAL = "basic_hr_technical"
    ROLE_BASED = "role_based"
    RESUME_BASED = "resume_based"


class SessionStatus(str, Enum):
    CREATED = "created"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class ScoreBreakdown(BaseModel):
    """Four rubric dimensions, each 0-10. Advisory: ``score`` is not derived from them."""

    model_config = ConfigDict(frozen=True)

    correctness: float = Field(0.0, ge=0, le=10)
    completeness: float = Field(0.0, ge=0, le=10)
    depth: float = Field(0.0, ge=0, le=10)
    clarity: float = Field(0.0, ge=0, le=10)


class EvaluationRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    question_number: int = Field(..., ge=1)
    user_answer: str = ""
    ideal_answer: str = ""
    score: float = Field(0.0, ge=0, le=10)
    remarks: str
    score_breakdown: ScoreBreakdown = Field(default_factory=ScoreBreakdown)
    improvement_tips: List[str] = Field(default_factory=list)


class AggregateStatistics(BaseModel):
    average_score: float = Field(0.0, ge=0, le=10)
    total_questions: int = Field(0, ge=0)
    strengths: List[str] = Field(default_factory=list)
    critical_weaknesses: List[str] = Field(default_factory=list)
    overall_grade: str = ""
    harsh_but_helpful_feedback: str = ""
    recommendation: str = ""


class EvaluationBatch(BaseModel):
    evaluations: List[EvaluationRecord]
    overall_statistics: AggregateStatistics
    # Where the batch came from; never part of the wire format.
    source: Literal["remote", "fallback", "unavailable"] = Field("remote", exclude=True)

    def to_payload(self) -> dict:
        return self.model_dump(mode="json")


class ResumeAnalysis(BaseModel):
    skills: List[str] = Field(default_factory=list)
    suggested_role: str = ""
    strengths: List[str] = Field(default_factory=list)
    areas_to_improve: List[str] = Field(default_factory=list)
    suggestions: str = ""


class QuestionSet(BaseModel):
    questions: List[str]
    ideal_answers: List[str]
    analysis: Optional[ResumeAnalysis] = None


def _now() -> datetime:
    return datetime.now(timezone.utc)


class InterviewSession(BaseModel):
    id: str
    owner_id: Optional[str] = None
    interview_type: InterviewCategory
    question_count: int = Field(..., ge=0)
    job_role: Optional[str] = None
    questions: List[str] = Field(default_factory=list)
    ideal_answers: List[str] = Field(default_factory=list)
    user_answers: Optional[List[str]] = None
    evaluations: List[EvaluationRecord] = Field(default_factory=list)
    overall_score: Optional[float] = Field(None, ge=0, le=10)
    session_status: SessionStatus = SessionStatus.CREATED
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)
    completed_at: Optional[datetime] = None
