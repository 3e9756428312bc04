import threading

import pytest

from mockinvi.cache import TTLCache


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return TTLCache(ttl=60, clock=clock)


def test_value_cached_until_expiry(cache, clock):
    calls = []

    def compute():
        calls.append(1)
        return len(calls)

    assert cache.get_or_compute("courses", compute) == 1
    assert cache.get_or_compute("courses", compute) == 1
    clock.now += 61
    assert cache.get_or_compute("courses", compute) == 2
    assert len(calls) == 2


def test_per_call_ttl(cache, clock):
    cache.get_or_compute("short", lambda: "v", ttl=5)
    clock.now += 6
    assert "short" not in cache


def test_stale_value_served_when_refresh_fails(cache, clock, caplog):
    cache.get_or_compute("courses", lambda: ["python"])
    clock.now += 120

    def broken():
        raise ConnectionError("db down")

    assert cache.get_or_compute("courses", broken) == ["python"]
    assert "using expired cache" in caplog.text


def test_error_without_cached_value_propagates(cache):
    def broken():
        raise ConnectionError("db down")

    with pytest.raises(ConnectionError):
        cache.get_or_compute("courses", broken)


def test_invalidate(cache):
    cache.get_or_compute("course_1", lambda: 1)
    cache.get_or_compute("course_2", lambda: 2)
    cache.invalidate("course_1")
    assert "course_1" not in cache
    assert "course_2" in cache
    cache.invalidate()
    assert len(cache) == 0


def test_invalidate_during_compute_discards_result(cache):
    source = {"title": "old"}
    started, written = threading.Event(), threading.Event()
    results = []

    def slow_read():
        value = source["title"]
        started.set()
        written.wait(timeout=5)
        return value

    reader = threading.Thread(target=lambda: results.append(cache.get_or_compute("course_1", slow_read)))
    reader.start()
    assert started.wait(timeout=5)
    source["title"] = "new"
    cache.invalidate("course_1")
    written.set()
    reader.join(timeout=5)

    assert results == ["old"]
    assert "course_1" not in cache
    assert cache.get_or_compute("course_1", lambda: source["title"]) == "new"


def test_full_invalidate_during_compute_discards_result(cache):
    def read_then_write():
        cache.invalidate()
        return "old"

    assert cache.get_or_compute("all_courses", read_then_write) == "old"
    assert "all_courses" not in cache
