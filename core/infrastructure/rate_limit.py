"""
Rate limiter abstraction (port).

This module defines the fixed-window throttle interface used by the
license engine. Implementations live in rate_limit_adapters.
"""
from abc import ABC, abstractmethod


class RateLimiter(ABC):
    """
    Abstract fixed-window rate limiter.

    A window opens on the first hit for a key and lasts window_seconds.
    Inside a window at most max_requests hits are let through; the first
    hit after the window elapses resets the counter to 1.
    """

    @abstractmethod
    def hit(self, limiter_key: str, window_seconds: int, max_requests: int) -> bool:
        """
        Register a request and decide whether it is throttled.

        Args:
            limiter_key: Key identifying the caller (see core.domain.hashing)
            window_seconds: Window length in seconds
            max_requests: Requests allowed per window

        Returns:
            True if the request is limited, False if it may proceed
        """
        pass
