import pytest

from mockinvi.errors import PersistenceError
from mockinvi.schemas import EvaluationRecord, InterviewCategory, SessionStatus
from mockinvi.store import InMemorySessionStore, SessionNotFound, persist_completed_session


@pytest.fixture
def store():
    return InMemorySessionStore()


def _record(n, score):
    return EvaluationRecord(question_number=n, user_answer="a", ideal_answer="i", score=score,
                            remarks="ok", improvement_tips=["tip"])


def test_create_and_get(store):
    session = store.create_session(InterviewCategory.ROLE_BASED, 2, ["q1", "q2"], ["i1", "i2"],
                                   job_role="SRE", owner_id="u-1")
    loaded = store.get_session(session.id)
    assert loaded.questions == ["q1", "q2"]
    assert loaded.job_role == "SRE"
    assert loaded.session_status == SessionStatus.CREATED
    assert loaded.user_answers is None


def test_returned_sessions_are_copies(store):
    session = store.create_session("basic_hr_technical", 1, ["q1"], ["i1"])
    session.questions.append("mutated")
    assert store.get_session(session.id).questions == ["q1"]


def test_missing_session(store):
    with pytest.raises(SessionNotFound):
        store.get_session("nope")
    with pytest.raises(SessionNotFound):
        store.update_session("nope", overall_score=5.0)


def test_mark_in_progress(store):
    session = store.create_session("basic_hr_technical", 1, ["q1"], ["i1"])
    assert store.mark_in_progress(session.id) is True
    updated = store.get_session(session.id)
    assert updated.session_status == SessionStatus.IN_PROGRESS
    assert updated.updated_at >= session.updated_at
    assert store.mark_in_progress(session.id) is False


def test_completed_session_is_not_restarted(store):
    session = store.create_session("basic_hr_technical", 1, ["q1"], ["i1"])
    persist_completed_session(store, session.id, ["answer"], [_record(1, 6.5)], 6.5)
    assert store.mark_in_progress(session.id) is False
    done = store.get_session(session.id)
    assert done.session_status == SessionStatus.COMPLETED
    assert done.overall_score == 6.5


def test_list_sessions_filters_by_owner(store):
    first = store.create_session("basic_hr_technical", 1, ["q1"], ["i1"], owner_id="a")
    second = store.create_session("basic_hr_technical", 1, ["q2"], ["i2"], owner_id="a")
    store.create_session("basic_hr_technical", 1, ["q3"], ["i3"], owner_id="b")
    ids = [s.id for s in store.list_sessions(owner_id="a")]
    assert set(ids) == {first.id, second.id}
    assert len(store.list_sessions()) == 3


def test_persist_completed_session(store):
    session = store.create_session("basic_hr_technical", 2, ["q1", "q2"], ["i1", "i2"])
    persist_completed_session(store, session.id, ["answer", None], [_record(1, 7), _record(2, 2)], 4.5)
    done = store.get_session(session.id)
    assert done.session_status == SessionStatus.COMPLETED
    assert done.user_answers == ["answer", ""]
    assert [e.score for e in done.evaluations] == [7, 2]
    assert done.overall_score == 4.5
    assert done.completed_at is not None


def test_persist_failure_is_wrapped(store):
    with pytest.raises(PersistenceError) as excinfo:
        persist_completed_session(store, "missing", ["a"], [_record(1, 5)], 5.0)
    assert excinfo.value.details == {"session_id": "missing"}
