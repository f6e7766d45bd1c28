# =========================================================
# FILE: /sitebuilder/services/history_feed.py
# =========================================================
"""
Change notifications for the website_generations table.

Each subscription owns a channel (asyncio.Queue) and a listener task that
calls `on_change` once per delivered change. Notifications carry no payload
contract: receivers re-read the full list.
"""

import asyncio
import inspect
import logging
import uuid
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

logger = logging.getLogger("sitebuilder.feed")

OnChange = Callable[[], Union[None, Awaitable[None]]]

INSERT = "INSERT"
DELETE = "DELETE"


@dataclass(frozen=True)
class HistoryChange:
    kind: str
    record_id: str
    owner_id: str


class Subscription:
    def __init__(self, feed: "HistoryFeed", owner_id: Optional[str], on_change: OnChange):
        self.id = uuid.uuid4().hex
        self.owner_id = owner_id
        self._feed = feed
        self._on_change = on_change
        self._queue: "asyncio.Queue[HistoryChange]" = asyncio.Queue()
        self._task: Optional[asyncio.Task] = None
        self.closed = False

    def matches(self, change: HistoryChange) -> bool:
        # owner_id=None listens to the whole table
        return self.owner_id is None or self.owner_id == change.owner_id

    def _start(self):
        self._task = asyncio.get_running_loop().create_task(self._listen())

    def _deliver(self, change: HistoryChange):
        if not self.closed:
            self._queue.put_nowait(change)

    async def _listen(self):
        while True:
            change = await self._queue.get()
            try:
                result = self._on_change()
                if inspect.isawaitable(result):
                    await result
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("History subscriber %s failed handling %s %s", self.id, change.kind, change.record_id)
            finally:
                self._queue.task_done()

    async def join(self):
        """Wait until every change delivered so far has been handled."""
        if not self.closed:
            await self._queue.join()

    async def close(self) -> bool:
        return await self._feed.unsubscribe(self)

    async def __aenter__(self) -> "Subscription":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
        return False


class HistoryFeed:
    def __init__(self):
        self._subscriptions: Dict[str, Subscription] = {}

    def __len__(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, owner_id: Optional[str], on_change: OnChange) -> Subscription:
        """Must be called from inside a running event loop."""
        sub = Subscription(self, owner_id, on_change)
        sub._start()
        self._subscriptions[sub.id] = sub
        logger.debug("History subscription %s opened (owner=%s)", sub.id, owner_id or "*")
        return sub

    async def unsubscribe(self, handle: Subscription) -> bool:
        if handle.closed:
            return False
        handle.closed = True
        self._subscriptions.pop(handle.id, None)

        task = handle._task
        if task is not None and not task.done():
            task.cancel()
            if task is not asyncio.current_task():
                try:
                    await task
                except asyncio.CancelledError:
                    pass
        logger.debug("History subscription %s closed", handle.id)
        return True

    def publish(self, change: HistoryChange) -> int:
        delivered = 0
        for sub in list(self._subscriptions.values()):
            if sub.matches(change):
                sub._deliver(change)
                delivered += 1
        return delivered

    async def close(self):
        for sub in list(self._subscriptions.values()):
            await self.unsubscribe(sub)


class HistoryViewer:
    """
    An in-memory history list for one owner, kept consistent by a full
    re-read on every change notification.
    """

    def __init__(self, store: Any, feed: HistoryFeed, owner_id: str):
        self._store = store
        self._feed = feed
        self.owner_id = owner_id
        self._records: List[Any] = []
        self._subscription: Optional[Subscription] = None
        self._lock = asyncio.Lock()

    @property
    def records(self) -> List[Any]:
        return list(self._records)

    @property
    def subscription(self) -> Optional[Subscription]:
        return self._subscription

    async def refresh(self):
        async with self._lock:
            self._records = await self._store.list(self.owner_id)

    async def start(self) -> "HistoryViewer":
        # subscribe before the first read so no change slips between them
        if self._subscription is None:
            self._subscription = self._feed.subscribe(self.owner_id, self.refresh)
        await self.refresh()
        return self

    async def close(self):
        if self._subscription is not None:
            await self._subscription.close()
            self._subscription = None

    async def __aenter__(self) -> "HistoryViewer":
        return await self.start()

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
        return False
