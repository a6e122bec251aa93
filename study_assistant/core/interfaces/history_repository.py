"""
Abstract interface for history persistence
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict


class NewHistoryRecord(BaseModel):
    """Values supplied by the caller when a generation completes"""
    model_config = ConfigDict(frozen=True)

    type: str
    subject: Optional[str] = None
    content: str
    result: str
    file_url: Optional[str] = None
    file_name: Optional[str] = None


class HistoryRecord(NewHistoryRecord):
    """Persisted, write-once record of a completed generation"""
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int
    created_at: datetime


class HistoryRepository(ABC):
    """
    Abstract base class for history stores

    Records are write-once; there is no update method.
    """

    @abstractmethod
    async def create(self, record: NewHistoryRecord) -> HistoryRecord:
        """
        Persist a record

        Returns:
            The stored record with ``id`` and ``created_at`` assigned
        """
        pass

    @abstractmethod
    async def list(self) -> List[HistoryRecord]:
        """
        List records newest first

        Returns an empty list if the underlying storage cannot be read.
        """
        pass

    @abstractmethod
    async def delete(self, record_id: int) -> None:
        """Delete a record by id; a missing id is a no-op"""
        pass
