import asyncio
from contextlib import asynccontextmanager
from types import SimpleNamespace
from typing import Any, List, Optional

from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from sitebuilder.core.database import init_db
from sitebuilder.services.generation_types import GenerationResult
from sitebuilder.services.history_feed import HistoryFeed
from sitebuilder.services.history_store import HistoryStore

TEST_DB_URL = "sqlite+aiosqlite://"


def run(coro):
    return asyncio.run(coro)


def make_test_engine():
    return create_async_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@asynccontextmanager
async def history_store(feed: Optional[HistoryFeed] = None):
    """Fresh in-memory database per use; tables created, engine disposed on exit."""
    engine = make_test_engine()
    await init_db(engine)
    store = HistoryStore(async_sessionmaker(engine, expire_on_commit=False), feed=feed)
    try:
        yield store
    finally:
        await store.feed.close()
        await engine.dispose()


def completion(content: Optional[str]) -> Any:
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class FakeCompletions:
    """Stands in for `OpenAI().chat.completions`; records every call."""

    def __init__(self, content: Optional[str] = "", error: Optional[Exception] = None):
        self.content = content
        self.error = error
        self.calls: List[dict] = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return completion(self.content)


def fake_sdk_client(content: Optional[str] = "", error: Optional[Exception] = None) -> Any:
    completions = FakeCompletions(content, error)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


class RacingStore:
    """
    Wraps a HistoryStore so that another write lands right after the first
    `list` read, before the reader has used its (now stale) result.
    """

    def __init__(self, store: HistoryStore, prompt: str = "raced"):
        self._store = store
        self._prompt = prompt
        self.raced = False

    def __getattr__(self, name):
        return getattr(self._store, name)

    async def list(self, owner_id: str):
        records = await self._store.list(owner_id)
        if not self.raced:
            self.raced = True
            await self._store.append(owner_id, self._prompt, GenerationResult(markup="<html/>"))
        return records
