# =========================================================
# FILE: sitebuilder/api/history.py
# =========================================================

import logging

from fastapi import APIRouter, Depends, Response

from sitebuilder.api.deps import get_current_owner, get_history_store
from sitebuilder.schemas.generate import ErrorResponse
from sitebuilder.schemas.history import HistoryItem, HistoryList
from sitebuilder.services.history_store import HistoryStore

router = APIRouter(prefix="/api", tags=["history"])
logger = logging.getLogger("sitebuilder.history")


@router.get("/history", response_model=HistoryList, responses={500: {"model": ErrorResponse}})
async def list_history(
        owner_id: str = Depends(get_current_owner),
        store: HistoryStore = Depends(get_history_store),
):
    records = await store.list(owner_id)
    return HistoryList(items=[HistoryItem.from_record(r) for r in records])


@router.get("/history/{record_id}", response_model=HistoryItem, responses={404: {"model": ErrorResponse}})
async def get_history_item(
        record_id: str,
        owner_id: str = Depends(get_current_owner),
        store: HistoryStore = Depends(get_history_store),
):
    record = await store.get(owner_id, record_id)
    return HistoryItem.from_record(record)


@router.delete(
    "/history/{record_id}",
    status_code=204,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def delete_history_item(
        record_id: str,
        owner_id: str = Depends(get_current_owner),
        store: HistoryStore = Depends(get_history_store),
):
    await store.remove(owner_id, record_id)
    logger.info("Generation %s deleted by user %s", record_id, owner_id)
    return Response(status_code=204)
