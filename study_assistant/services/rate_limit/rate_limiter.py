"""
Per-identity daily request quota
"""
import threading
from datetime import date
from typing import Callable, Dict, Optional
from loguru import logger

from study_assistant.core.interfaces.usage_backend import UsageBackend, UsageRecord


class InMemoryUsageBackend(UsageBackend):
    """Process-local usage store; counts are lost on restart"""

    def __init__(self):
        self._records: Dict[str, UsageRecord] = {}

    def get(self, identity: str) -> Optional[UsageRecord]:
        return self._records.get(identity)

    def set(self, identity: str, record: UsageRecord) -> None:
        self._records[identity] = record

    def clear(self, identity: Optional[str] = None) -> None:
        if identity is None:
            self._records.clear()
        else:
            self._records.pop(identity, None)


class RateLimiter:
    """
    Daily request counter keyed by caller identity

    A check that is allowed consumes one request immediately; a denied check
    changes nothing. The check-then-increment sequence runs under a lock so
    two concurrent requests cannot both take the last slot.
    """

    def __init__(
        self,
        daily_limit: int = 5,
        backend: Optional[UsageBackend] = None,
        today_provider: Callable[[], date] = date.today,
    ):
        """
        Initialize rate limiter

        Args:
            daily_limit: Requests allowed per identity per calendar day
            backend: Counter storage, in-memory by default
            today_provider: Returns the current local calendar date
        """
        if daily_limit < 1:
            raise ValueError("daily_limit must be at least 1")

        self.daily_limit = daily_limit
        self.backend = backend or InMemoryUsageBackend()
        self._today = today_provider
        self._lock = threading.Lock()

    def check_rate_limit(self, identity: str) -> bool:
        """
        Consume one request for identity if quota remains

        Returns:
            True if the request is allowed
        """
        today = self._today()
        with self._lock:
            record = self.backend.get(identity)

            if record is None or record.day != today:
                self.backend.set(identity, UsageRecord(count=1, day=today))
                return True

            if record.count >= self.daily_limit:
                logger.info(f"🚫 Daily limit reached for {identity} ({record.count}/{self.daily_limit})")
                return False

            self.backend.set(identity, UsageRecord(count=record.count + 1, day=today))
            return True

    def get_remaining_requests(self, identity: str) -> int:
        """Requests identity may still make today"""
        today = self._today()
        with self._lock:
            record = self.backend.get(identity)

        if record is None or record.day != today:
            return self.daily_limit
        return max(0, self.daily_limit - record.count)

    def reset(self, identity: Optional[str] = None) -> None:
        """Forget usage for one identity, or for everyone"""
        with self._lock:
            self.backend.clear(identity)
