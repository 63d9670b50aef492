"""
Rate limiter adapter implementations.

Provides a database-backed limiter shared by every service instance and an
in-memory limiter for single-process use and tests.
"""

import logging
import threading
from datetime import datetime
from typing import Callable, Dict, Tuple

from django.db.models import F
from django.utils import timezone

from core.infrastructure.database import storage_errors
from core.infrastructure.models import RateLimitCounter
from core.infrastructure.rate_limit import RateLimiter

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class DjangoRateLimiter(RateLimiter):
    """
    Database-backed fixed-window limiter.

    Every decision is a conditional UPDATE whose affected-row count is the
    answer, so two concurrent hits can never both pass on a stale count.
    """

    def __init__(self, clock: Clock = timezone.now):
        """Initialize limiter with a clock returning aware datetimes."""
        self._clock = clock

    def hit(self, limiter_key: str, window_seconds: int, max_requests: int) -> bool:
        now = int(self._clock().timestamp())
        window_floor = now - window_seconds

        with storage_errors("rate_limits.hit"):
            counters = RateLimitCounter.objects.filter(limiter_key=limiter_key)  # pylint: disable=no-member

            if self._increment_in_window(counters, window_floor, max_requests):
                return False

            # Window elapsed: restart it with this request as the first hit
            if counters.filter(window_start__lte=window_floor).update(window_start=now, count=1):
                return False

            _, created = RateLimitCounter.objects.get_or_create(  # pylint: disable=no-member
                limiter_key=limiter_key,
                defaults={"window_start": now, "count": 1},
            )
            if created:
                return False

            # Row was created concurrently after the first UPDATE ran
            if self._increment_in_window(counters, window_floor, max_requests):
                return False

        logger.info("Rate limit exceeded for limiter key %s...", limiter_key[:12])
        return True

    @staticmethod
    def _increment_in_window(counters, window_floor: int, max_requests: int) -> bool:
        """Increment the counter if it is inside its window and below the ceiling."""
        updated = counters.filter(
            window_start__gt=window_floor,
            count__lt=max_requests,
        ).update(count=F("count") + 1)
        return updated > 0


class InMemoryRateLimiter(RateLimiter):
    """
    Process-local fixed-window limiter.

    Counters are kept in a dict guarded by a lock; the read and the
    increment happen under the same lock acquisition.
    """

    def __init__(self, clock: Clock = timezone.now):
        """Initialize limiter with a clock returning aware datetimes."""
        self._clock = clock
        self._lock = threading.Lock()
        self._counters: Dict[str, Tuple[int, int]] = {}

    def hit(self, limiter_key: str, window_seconds: int, max_requests: int) -> bool:
        now = int(self._clock().timestamp())
        with self._lock:
            counter = self._counters.get(limiter_key)
            if counter is None or now - counter[0] >= window_seconds:
                self._counters[limiter_key] = (now, 1)
                return False

            window_start, count = counter
            if count >= max_requests:
                return True

            self._counters[limiter_key] = (window_start, count + 1)
            return False

    def count(self, limiter_key: str) -> int:
        """Return the current count for a key (0 if unknown)."""
        with self._lock:
            counter = self._counters.get(limiter_key)
            return counter[1] if counter else 0
