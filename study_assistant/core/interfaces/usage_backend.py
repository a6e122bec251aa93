"""
Abstract interface for per-identity usage counters
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class UsageRecord:
    """Requests counted for one identity on one calendar day"""
    count: int
    day: date


class UsageBackend(ABC):
    """
    Key-value store for usage records

    The rate limiter serializes access itself; backends only need to store
    and return records. A shared backend (e.g. a distributed cache) can be
    swapped in to share quotas across processes.
    """

    @abstractmethod
    def get(self, identity: str) -> Optional[UsageRecord]:
        pass

    @abstractmethod
    def set(self, identity: str, record: UsageRecord) -> None:
        pass

    @abstractmethod
    def clear(self, identity: Optional[str] = None) -> None:
        """Drop one identity's record, or every record when identity is None"""
        pass
