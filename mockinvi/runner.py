import json
import logging
import os
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from .config import EvaluatorConfig
from .errors import InsufficientDataError, PersistenceError
from .evaluator import Completion, bulk_evaluate_answers
from .feedback import average_score, grade_for_score, unavailable_result
from .loaders import normalize_session_block, relax_load_json
from .questions import generate_question_set
from .schemas import EvaluationBatch, InterviewCategory, InterviewSession
from .store import SessionStore, persist_completed_session

logger = logging.getLogger(__name__)


@dataclass
class InterviewOutcome:
    batch: EvaluationBatch
    overall_score: float
    grade: str
    persisted: bool


def start_interview(store: SessionStore, category: InterviewCategory, question_count: int,
                    config: EvaluatorConfig, job_role: Optional[str] = None,
                    resume_text: Optional[str] = None, owner_id: Optional[str] = None,
                    complete: Optional[Completion] = None) -> InterviewSession:
    question_set = generate_question_set(category, question_count, config, job_role=job_role,
                                         resume_text=resume_text, complete=complete)
    session = store.create_session(
        interview_type=category,
        question_count=len(question_set.questions),
        questions=question_set.questions,
        ideal_answers=question_set.ideal_answers,
        job_role=job_role,
        owner_id=owner_id,
    )
    logger.info("Created %s interview session %s with %d questions",
                InterviewCategory(category).value, session.id, len(session.questions))
    return session


def evaluate_session_answers(questions: Sequence[str], answers: Sequence[Optional[str]],
                             ideal_answers: Sequence[Optional[str]], config: EvaluatorConfig,
                             context: Optional[str] = None, complete: Optional[Completion] = None,
                             rng=None) -> EvaluationBatch:
    try:
        return bulk_evaluate_answers(questions, answers, ideal_answers, config,
                                     context=context, complete=complete, rng=rng)
    except InsufficientDataError:
        raise
    except Exception:
        logger.exception("Evaluation failed outright, returning placeholder result")
        n = min(len(questions), len(answers), len(ideal_answers))
        return unavailable_result(list(questions[:n]), list(answers[:n]), list(ideal_answers[:n]))


def complete_interview(store: SessionStore, session: InterviewSession, answers: Sequence[Optional[str]],
                       config: EvaluatorConfig, context: Optional[str] = None,
                       complete: Optional[Completion] = None, rng=None) -> InterviewOutcome:
    """Evaluate a session's answers and store the result.

    A failed write is logged and reported through ``persisted``; the
    evaluation is returned either way.
    """
    batch = evaluate_session_answers(session.questions, answers, session.ideal_answers, config,
                                     context=context, complete=complete, rng=rng)
    # The remote aggregate is display text only; the stored score comes from the records.
    avg = round(average_score(batch.evaluations), 2)

    persisted = True
    try:
        persist_completed_session(store, session.id, answers, batch.evaluations, avg)
    except PersistenceError:
        logger.exception("Error updating interview session %s; showing results without saving", session.id)
        persisted = False

    return InterviewOutcome(batch=batch, overall_score=avg, grade=grade_for_score(avg), persisted=persisted)


def run_full_pass(in_path: str, out_path: str, config: EvaluatorConfig,
                  context: Optional[str] = None) -> Dict[str, Any]:
    data = normalize_session_block(relax_load_json(in_path))
    t0 = time.time()

    batch = evaluate_session_answers(data["questions"], data["answers"], data["ideal_answers"], config,
                                     context=context or data["context"])
    avg = average_score(batch.evaluations)

    out = {
        "meta": {
            "session_id": data["id"],
            "model": config.model,
            "mock_mode": config.mock_mode,
            "source": batch.source,
            "elapsed_sec": round(time.time() - t0, 2),
            "graded_questions": len(batch.evaluations),
            "total_questions": len(data["questions"]),
        },
        **batch.to_payload(),
        "overall": {"numeric_mean_0_10": round(avg, 2), "grade": grade_for_score(avg)},
    }
    out_dir = os.path.dirname(out_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(out, f, indent=2, ensure_ascii=False)
    return out
