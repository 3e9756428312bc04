import json
import logging

from django.contrib.auth.decorators import login_required
from django.http import Http404, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from mockinvi.errors import InsufficientDataError, RemoteServiceError
from mockinvi.feedback import summarize_report
from mockinvi.identity import consistent_uuid
from mockinvi.resume import read_pdf, resume_context
from mockinvi.runner import complete_interview, start_interview
from mockinvi.schemas import InterviewCategory
from mockinvi.store import SessionNotFound

from . import catalog
from .models import Course
from .store import DjangoSessionStore, resolve_evaluator_config

logger = logging.getLogger(__name__)

store = DjangoSessionStore()


def _payload(request):
	if request.content_type == "application/json":
		try:
			data = json.loads(request.body or b"{}")
		except ValueError:
			return None
		return data if isinstance(data, dict) else None
	return request.POST.dict()


def _owner_id(request):
	return consistent_uuid(request.user.get_username())


def _owned_session(request, session_id):
	try:
		session = store.get_session(str(session_id))
	except SessionNotFound:
		raise Http404("Interview session not found")
	if session.owner_id and session.owner_id != _owner_id(request):
		raise Http404("Interview session not found")
	return session


@login_required
@require_POST
@csrf_exempt
def create_interview(request):
	data = _payload(request)
	if data is None:
		return JsonResponse({"error": "Request body must be a JSON object"}, status=400)

	try:
		category = InterviewCategory(data.get("interview_type", InterviewCategory.BASIC_HR_TECHNICAL.value))
		question_count = int(data.get("question_count", 5))
	except (TypeError, ValueError) as exc:
		return JsonResponse({"error": str(exc)}, status=400)

	resume_text = data.get("resume_text") or ""
	if "resume" in request.FILES:
		resume_text = read_pdf(request.FILES["resume"])

	config = resolve_evaluator_config()
	try:
		session = start_interview(store, category, question_count, config,
								  job_role=data.get("job_role"), resume_text=resume_text,
								  owner_id=_owner_id(request))
	except InsufficientDataError as exc:
		return JsonResponse({"error": exc.message}, status=400)
	except RemoteServiceError as exc:
		logger.error("Question generation failed: %s", exc)
		return JsonResponse({"error": "Question generation is unavailable, please try again"}, status=502)

	return JsonResponse({
		"session_id": session.id,
		"interview_type": session.interview_type.value,
		"question_count": session.question_count,
		"questions": session.questions,
		"session_status": session.session_status.value,
	}, status=201)


@login_required
@require_POST
@csrf_exempt
def begin_interview(request, session_id):
	session = _owned_session(request, session_id)
	if not store.mark_in_progress(session.id):
		return JsonResponse({
			"error": "Interview session has already been started",
			"session_id": session.id,
			"session_status": session.session_status.value,
		}, status=409)
	return JsonResponse({"session_id": session.id, "session_status": "in_progress"})


@login_required
@require_POST
@csrf_exempt
def submit_answers(request, session_id):
	session = _owned_session(request, session_id)
	data = _payload(request)
	if data is None or not isinstance(data.get("answers"), list):
		return JsonResponse({"error": "'answers' must be a list"}, status=400)
	if not all(a is None or isinstance(a, str) for a in data["answers"]):
		return JsonResponse({"error": "Each answer must be a string or null"}, status=400)

	config = resolve_evaluator_config()
	context = resume_context(data.get("resume_text") or "")
	try:
		outcome = complete_interview(store, session, data["answers"], config, context=context or None)
	except InsufficientDataError as exc:
		return JsonResponse({"error": exc.message}, status=400)

	return JsonResponse({
		"session_id": session.id,
		**outcome.batch.to_payload(),
		"overall_score": outcome.overall_score,
		"grade": outcome.grade,
		"source": outcome.batch.source,
		"persisted": outcome.persisted,
	})


@login_required
@require_GET
def interview_report(request, session_id):
	session = _owned_session(request, session_id)
	return JsonResponse(summarize_report(session))


@login_required
@require_GET
def interview_history(request):
	sessions = store.list_sessions(owner_id=_owner_id(request))
	return JsonResponse({"sessions": [
		{
			"session_id": s.id,
			"interview_type": s.interview_type.value,
			"question_count": s.question_count,
			"job_role": s.job_role,
			"session_status": s.session_status.value,
			"overall_score": s.overall_score,
			"created_at": s.created_at.isoformat(),
			"completed_at": s.completed_at.isoformat() if s.completed_at else None,
		}
		for s in sessions
	]})


@login_required
@require_GET
def course_list(request):
	if request.GET.get("q"):
		courses = catalog.search_courses(request.GET["q"])
	elif request.GET.get("category"):
		courses = catalog.fetch_courses_by_category(request.GET["category"])
	elif request.GET.get("difficulty"):
		courses = catalog.fetch_courses_by_difficulty(request.GET["difficulty"])
	else:
		courses = catalog.fetch_courses()
	return JsonResponse({"courses": courses})


@login_required
@require_GET
def course_detail(request, course_id):
	try:
		course = catalog.fetch_course(course_id)
	except Course.DoesNotExist:
		raise Http404("Course not found")
	return JsonResponse({**course, "videos": catalog.fetch_course_videos(course_id)})
