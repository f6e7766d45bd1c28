# FILE: sitebuilder/services/history_store.py

import logging
import uuid
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy import select, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from sitebuilder.core.errors import NotFound, PersistenceError
from sitebuilder.models.website_generation import WebsiteGeneration
from sitebuilder.services.generation_types import GenerationResult, HistoryRecord
from sitebuilder.services.history_feed import DELETE, INSERT, HistoryChange, HistoryFeed

logger = logging.getLogger("sitebuilder.history")


class HistoryStore:
    """
    Sole writer of website_generations. Records are appended and removed,
    never updated. Every committed mutation is published on the feed.
    """

    def __init__(self, session_factory: Optional[async_sessionmaker] = None, feed: Optional[HistoryFeed] = None):
        if session_factory is None:
            from sitebuilder.core.database import SessionLocal
            session_factory = SessionLocal
        self._session_factory = session_factory
        self.feed = feed if feed is not None else HistoryFeed()
        self._last_created_at: Optional[datetime] = None

    def _next_created_at(self) -> datetime:
        # strictly increasing within the process so newest-first is stable
        now = datetime.utcnow()
        if self._last_created_at is not None and now <= self._last_created_at:
            now = self._last_created_at + timedelta(microseconds=1)
        self._last_created_at = now
        return now

    async def append(
            self,
            owner_id: str,
            prompt: str,
            result: GenerationResult,
            website_url: Optional[str] = None,
    ) -> HistoryRecord:
        row = WebsiteGeneration(
            id=str(uuid.uuid4()),
            user_id=owner_id,
            prompt=prompt,
            generated_code=result.markup,
            has_backend=result.has_backend,
            backend_code=result.backend_code,
            database_schema=result.database_schema,
            edge_functions=result.edge_functions_as_dicts(),
            website_url=website_url,
            created_at=self._next_created_at(),
        )
        record = HistoryRecord.from_row(row)

        try:
            async with self._session_factory() as db:
                db.add(row)
                await db.commit()
        except SQLAlchemyError as e:
            logger.exception("Error saving generation for user %s", owner_id)
            raise PersistenceError("Could not save generation to history") from e

        self.feed.publish(HistoryChange(INSERT, record.id, owner_id))
        return record

    async def list(self, owner_id: str) -> List[HistoryRecord]:
        try:
            async with self._session_factory() as db:
                rows = (
                    await db.execute(
                        select(WebsiteGeneration)
                        .where(WebsiteGeneration.user_id == owner_id)
                        .order_by(WebsiteGeneration.created_at.desc())
                    )
                ).scalars().all()
        except SQLAlchemyError as e:
            logger.exception("Error loading history for user %s", owner_id)
            raise PersistenceError("Could not load history") from e

        return [HistoryRecord.from_row(r) for r in rows]

    async def get(self, owner_id: str, record_id: str) -> HistoryRecord:
        try:
            async with self._session_factory() as db:
                row = (
                    await db.execute(
                        select(WebsiteGeneration)
                        .where(
                            WebsiteGeneration.id == record_id,
                            WebsiteGeneration.user_id == owner_id,
                        )
                    )
                ).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.exception("Error loading generation %s", record_id)
            raise PersistenceError("Could not load generation") from e

        if not row:
            raise NotFound()
        return HistoryRecord.from_row(row)

    async def remove(self, owner_id: str, record_id: str) -> None:
        try:
            async with self._session_factory() as db:
                res = await db.execute(
                    delete(WebsiteGeneration)
                    .where(
                        WebsiteGeneration.id == record_id,
                        WebsiteGeneration.user_id == owner_id,
                    )
                )
                await db.commit()
        except SQLAlchemyError as e:
            logger.exception("Error deleting generation %s", record_id)
            raise PersistenceError("Could not delete generation") from e

        if not res.rowcount:
            raise NotFound()

        self.feed.publish(HistoryChange(DELETE, record_id, owner_id))
