"""Course and video lookups served through a short-lived process cache.

Every write goes through ``invalidate_course`` so cached reads never outlive
a change to the same course.
"""

from django.conf import settings

from mockinvi.cache import ALL, TTLCache

from .models import Course, Video

cache = TTLCache(ttl=getattr(settings, "CATALOG_CACHE_TTL", 300))


def _course_dict(course):
    return {
        "id": course.id,
        "title": course.title,
        "description": course.description,
        "category": course.category,
        "difficulty": course.difficulty,
        "created_at": course.created_at.isoformat(),
    }


def _video_dict(video):
    return {
        "id": video.id,
        "course_id": video.course_id,
        "title": video.title,
        "video_url": video.video_url,
        "duration_seconds": video.duration_seconds,
        "order_index": video.order_index,
    }


def _published():
    return Course.objects.filter(is_published=True)


def fetch_courses():
    return cache.get_or_compute("all_courses", lambda: [_course_dict(c) for c in _published()])


def fetch_course(course_id):
    return cache.get_or_compute(f"course_{course_id}",
                                lambda: _course_dict(_published().get(pk=course_id)))


def fetch_course_videos(course_id):
    return cache.get_or_compute(f"videos_{course_id}",
                                lambda: [_video_dict(v) for v in Video.objects.filter(course_id=course_id)])


def fetch_courses_by_category(category):
    return cache.get_or_compute(f"courses_category_{category}",
                                lambda: [_course_dict(c) for c in _published().filter(category=category)])


def fetch_courses_by_difficulty(difficulty):
    return cache.get_or_compute(f"courses_difficulty_{difficulty}",
                                lambda: [_course_dict(c) for c in _published().filter(difficulty=difficulty)])


def search_courses(query):
    query = (query or "").strip().lower()
    return cache.get_or_compute(f"search_{query}", lambda: [
        _course_dict(c) for c in _published().filter(title__icontains=query)
    ])


def invalidate_course(course_id=None, videos_only=False):
    if videos_only and course_id is not None:
        cache.invalidate(f"videos_{course_id}")
        return
    # Listing and search keys may contain any course, so course writes drop everything.
    cache.invalidate(ALL)


def add_course(**fields):
    course = Course.objects.create(**fields)
    invalidate_course()
    return _course_dict(course)


def update_course(course_id, **fields):
    course = Course.objects.get(pk=course_id)
    for name, value in fields.items():
        setattr(course, name, value)
    course.save()
    invalidate_course(course_id)
    return _course_dict(course)


def delete_course(course_id):
    Course.objects.filter(pk=course_id).delete()
    invalidate_course(course_id)


def add_video(course_id, **fields):
    video = Video.objects.create(course_id=course_id, **fields)
    invalidate_course(course_id, videos_only=True)
    return _video_dict(video)


def update_video(video_id, **fields):
    video = Video.objects.get(pk=video_id)
    for name, value in fields.items():
        setattr(video, name, value)
    video.save()
    invalidate_course(video.course_id, videos_only=True)
    return _video_dict(video)


def delete_video(video_id):
    video = Video.objects.filter(pk=video_id).first()
    if video is None:
        return
    course_id = video.course_id
    video.delete()
    invalidate_course(course_id, videos_only=True)
