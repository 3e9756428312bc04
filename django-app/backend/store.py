import logging
from enum import Enum

from django.core.exceptions import ValidationError
from django.utils import timezone

from mockinvi.config import EvaluatorConfig
from mockinvi.schemas import InterviewCategory, SessionStatus
from mockinvi.store import SessionNotFound, SessionStore

from .models import AdminCredentials, InterviewSession

logger = logging.getLogger(__name__)


def resolve_evaluator_config() -> EvaluatorConfig:
    """Resolve generation settings once per request; the admin-configured key wins."""
    creds = AdminCredentials.objects.order_by('-updated_at').first()
    key = creds.openai_api_key.strip() if creds and creds.openai_api_key else None
    if key is None:
        logger.debug("No admin-configured API key, falling back to environment")
    return EvaluatorConfig.from_env(api_key=key)


def _column_value(value):
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, list):
        return [v.model_dump(mode="json") if hasattr(v, "model_dump") else v for v in value]
    return value


class DjangoSessionStore(SessionStore):

    def _row(self, session_id):
        try:
            return InterviewSession.objects.get(pk=session_id)
        except (InterviewSession.DoesNotExist, ValidationError, ValueError):
            raise SessionNotFound(session_id) from None

    def create_session(self, interview_type, question_count, questions, ideal_answers,
                       job_role=None, owner_id=None):
        row = InterviewSession.objects.create(
            interview_type=InterviewCategory(interview_type).value,
            question_count=question_count,
            job_role=job_role,
            questions=list(questions),
            ideal_answers=list(ideal_answers),
            owner_id=owner_id,
        )
        return row.to_record()

    def get_session(self, session_id):
        return self._row(session_id).to_record()

    def update_session(self, session_id, **fields):
        values = {name: _column_value(value) for name, value in fields.items()}
        values["updated_at"] = timezone.now()
        try:
            updated = InterviewSession.objects.filter(pk=session_id).update(**values)
        except (ValidationError, ValueError):
            raise SessionNotFound(session_id) from None
        if not updated:
            raise SessionNotFound(session_id)

    def mark_in_progress(self, session_id):
        row = self._row(session_id)
        updated = InterviewSession.objects.filter(
            pk=row.pk, session_status=SessionStatus.CREATED.value,
        ).update(session_status=SessionStatus.IN_PROGRESS.value, updated_at=timezone.now())
        return bool(updated)

    def list_sessions(self, owner_id=None):
        rows = InterviewSession.objects.all()
        if owner_id is not None:
            rows = rows.filter(owner_id=owner_id)
        return [row.to_record() for row in rows.order_by('-created_at')]
