"""Process-local, time-expiring memo for read-only reference data."""

import logging
import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

ALL = "*"
DEFAULT_TTL = 5 * 60


class TTLCache:
    def __init__(self, ttl: float = DEFAULT_TTL, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[str, Tuple[Any, float]] = {}
        self._generations: Dict[str, int] = {}
        self._epoch = 0
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        entry = self._entries.get(key)
        return entry is not None and self._clock() < entry[1]

    def _generation(self, key: str) -> Tuple[int, int]:
        return self._epoch, self._generations.get(key, 0)

    def get_or_compute(self, key: str, compute: Callable[[], Any], ttl: Optional[float] = None) -> Any:
        """Return the cached value for ``key`` or compute and store it.

        If recomputing an expired entry raises, the expired value is served
        instead; with nothing cached the error propagates.
        """
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            generation = self._generation(key)
        if entry is not None and now < entry[1]:
            return entry[0]

        try:
            value = compute()
        except Exception as exc:
            if entry is not None:
                logger.warning("Fetch for %r failed, using expired cache: %s", key, exc)
                return entry[0]
            raise

        with self._lock:
            # An invalidate that ran while computing wins; the value is returned but not kept.
            if self._generation(key) == generation:
                self._entries[key] = (value, now + (self.ttl if ttl is None else ttl))
        return value

    def invalidate(self, key: str = ALL) -> None:
        with self._lock:
            if key == ALL:
                self._entries.clear()
                self._generations.clear()
                self._epoch += 1
            else:
                self._entries.pop(key, None)
                self._generations[key] = self._generations.get(key, 0) + 1
