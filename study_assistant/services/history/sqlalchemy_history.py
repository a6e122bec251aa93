"""
SQLAlchemy-backed history store
"""
import asyncio
from typing import List
from sqlalchemy import desc
from sqlalchemy.orm import Session, sessionmaker
from loguru import logger

from study_assistant.core.interfaces.history_repository import (
    HistoryRepository,
    HistoryRecord,
    NewHistoryRecord,
)
from study_assistant.db.models import History


class SQLAlchemyHistoryRepository(HistoryRepository):
    """
    History store on a relational table

    Session work is synchronous, so each operation runs in a worker thread.
    The table is the only copy of history; nothing is cached in process.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    async def create(self, record: NewHistoryRecord) -> HistoryRecord:
        return await asyncio.to_thread(self._create, record)

    async def list(self) -> List[HistoryRecord]:
        try:
            return await asyncio.to_thread(self._list)
        except Exception as e:
            logger.error(f"Database fetch error: {e}")
            return []

    async def delete(self, record_id: int) -> None:
        await asyncio.to_thread(self._delete, record_id)

    def _create(self, record: NewHistoryRecord) -> HistoryRecord:
        session: Session = self.session_factory()
        try:
            row = History(**record.model_dump())
            session.add(row)
            session.commit()
            session.refresh(row)
            logger.info(f"💾 Saved history #{row.id} ({row.type})")
            return HistoryRecord.model_validate(row)
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def _list(self) -> List[HistoryRecord]:
        session: Session = self.session_factory()
        try:
            rows = (
                session.query(History)
                .order_by(desc(History.created_at), desc(History.id))
                .all()
            )
            return [HistoryRecord.model_validate(row) for row in rows]
        finally:
            session.close()

    def _delete(self, record_id: int) -> None:
        session: Session = self.session_factory()
        try:
            deleted = session.query(History).filter(History.id == record_id).delete()
            session.commit()
            if deleted:
                logger.info(f"🗑️ Deleted history #{record_id}")
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
