import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from .errors import PersistenceError
from .schemas import EvaluationRecord, InterviewCategory, InterviewSession, SessionStatus

logger = logging.getLogger(__name__)


class SessionNotFound(KeyError):
    pass


class SessionStore(ABC):
    """Record store for interview sessions, addressed by session id."""

    @abstractmethod
    def create_session(self, interview_type: InterviewCategory, question_count: int,
                       questions: Sequence[str], ideal_answers: Sequence[str],
                       job_role: Optional[str] = None, owner_id: Optional[str] = None) -> InterviewSession:
        ...

    @abstractmethod
    def get_session(self, session_id: str) -> InterviewSession:
        ...

    @abstractmethod
    def update_session(self, session_id: str, **fields) -> None:
        """Single-record update of the given fields."""

    @abstractmethod
    def list_sessions(self, owner_id: Optional[str] = None) -> List[InterviewSession]:
        """Newest first."""

    def mark_in_progress(self, session_id: str) -> bool:
        """Move a created session to in-progress. False if it has already moved on."""
        if self.get_session(session_id).session_status != SessionStatus.CREATED:
            return False
        self.update_session(session_id, session_status=SessionStatus.IN_PROGRESS)
        return True


class InMemorySessionStore(SessionStore):
    def __init__(self):
        self._sessions: Dict[str, InterviewSession] = {}

    def create_session(self, interview_type, question_count, questions, ideal_answers,
                       job_role=None, owner_id=None):
        session = InterviewSession(
            id=str(uuid.uuid4()),
            owner_id=owner_id,
            interview_type=InterviewCategory(interview_type),
            question_count=question_count,
            job_role=job_role,
            questions=list(questions),
            ideal_answers=list(ideal_answers),
        )
        self._sessions[session.id] = session
        return session.model_copy(deep=True)

    def get_session(self, session_id):
        try:
            return self._sessions[session_id].model_copy(deep=True)
        except KeyError:
            raise SessionNotFound(session_id) from None

    def update_session(self, session_id, **fields):
        if session_id not in self._sessions:
            raise SessionNotFound(session_id)
        fields["updated_at"] = datetime.now(timezone.utc)
        current = self._sessions[session_id].model_dump()
        current.update(fields)
        self._sessions[session_id] = InterviewSession.model_validate(current)

    def list_sessions(self, owner_id=None):
        sessions = [s for s in self._sessions.values() if owner_id is None or s.owner_id == owner_id]
        sessions.sort(key=lambda s: s.created_at, reverse=True)
        return [s.model_copy(deep=True) for s in sessions]


def persist_completed_session(store: SessionStore, session_id: str, user_answers: Sequence[Optional[str]],
                              evaluations: Sequence[EvaluationRecord], overall_score: float) -> None:
    """Write the final state of a completed interview in one update."""
    try:
        store.update_session(
            session_id,
            user_answers=[str(a) if a is not None else "" for a in user_answers],
            evaluations=list(evaluations),
            overall_score=overall_score,
            session_status=SessionStatus.COMPLETED,
            completed_at=datetime.now(timezone.utc),
        )
    except Exception as exc:
        raise PersistenceError(f"Failed to update interview session {session_id}: {exc}",
                               details={"session_id": session_id}) from exc
