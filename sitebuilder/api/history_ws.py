# /sitebuilder/api/history_ws.py
"""
WebSocket endpoint that keeps a viewer's history list live.
"""
import asyncio
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

from sitebuilder.api.deps import decode_owner_token, get_history_feed, get_history_store
from sitebuilder.core.errors import PersistenceError
from sitebuilder.schemas.history import HistoryItem
from sitebuilder.services.history_feed import HistoryFeed
from sitebuilder.services.history_store import HistoryStore

router = APIRouter(tags=["history"])
logger = logging.getLogger("sitebuilder.ws")

WS_POLICY_VIOLATION = 1008


async def send_json(ws: WebSocket, data: Dict[str, Any]):
    """Send JSON data to WebSocket if connected."""
    if ws.client_state == WebSocketState.CONNECTED:
        await ws.send_json(data)


@router.websocket("/ws/history")
async def history_websocket(
        websocket: WebSocket,
        token: str = Query(None),
        store: HistoryStore = Depends(get_history_store),
        feed: HistoryFeed = Depends(get_history_feed),
):
    try:
        owner_id = decode_owner_token(token)
    except HTTPException as e:
        await websocket.close(code=WS_POLICY_VIOLATION, reason=str(e.detail))
        return

    await websocket.accept()
    # list + send as one step, so an older list never lands after a newer one
    push_lock = asyncio.Lock()

    async def push_history():
        async with push_lock:
            try:
                records = await store.list(owner_id)
            except PersistenceError as e:
                await send_json(websocket, {"type": "error", "error": e.message})
                return
            await send_json(websocket, {
                "type": "history",
                "items": [HistoryItem.from_record(r).model_dump() for r in records],
            })

    # subscribe before the first read: a change landing in between still triggers a push
    async with feed.subscribe(owner_id, push_history):
        await push_history()
        try:
            while True:
                data = await websocket.receive_json()
                msg_type = data.get("type")

                if msg_type == "refresh":
                    await push_history()
                elif msg_type == "ping":
                    await send_json(websocket, {"type": "pong"})
                else:
                    await send_json(websocket, {"type": "error", "error": f"Unknown message type: {msg_type}"})
        except WebSocketDisconnect:
            logger.debug("History socket closed for user %s", owner_id)
