# FILE: sitebuilder/api/deps.py

from typing import Optional

import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from sitebuilder.core.config import JWT_SECRET, JWT_ALGORITHM
from sitebuilder.services.gateway_client import ModelGatewayClient
from sitebuilder.services.generation_service import GenerationService
from sitebuilder.services.history_feed import HistoryFeed
from sitebuilder.services.history_store import HistoryStore

security = HTTPBearer(auto_error=False)

# Process-wide singletons: one feed per worker process
_history_feed: Optional[HistoryFeed] = None
_history_store: Optional[HistoryStore] = None
_gateway_client: Optional[ModelGatewayClient] = None


def decode_owner_token(token: Optional[str]) -> str:
    """Return the principal id carried by a bearer token or raise 401."""
    if not token or not token.strip():
        raise HTTPException(status_code=401, detail="Not authenticated")

    try:
        payload = jwt.decode(
            token.strip(),
            JWT_SECRET,
            algorithms=[JWT_ALGORITHM],
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid token")

    owner_id = payload.get("user_id") or payload.get("sub") or payload.get("id")
    if not owner_id or not isinstance(owner_id, str):
        raise HTTPException(status_code=401, detail="Invalid token payload")
    return owner_id


async def get_current_owner(
        credentials: HTTPAuthorizationCredentials = Depends(security),
) -> str:
    return decode_owner_token(credentials.credentials if credentials else None)


def get_history_feed() -> HistoryFeed:
    global _history_feed
    if _history_feed is None:
        _history_feed = HistoryFeed()
    return _history_feed


def get_history_store() -> HistoryStore:
    global _history_store
    if _history_store is None:
        _history_store = HistoryStore(feed=get_history_feed())
    return _history_store


def get_gateway_client() -> ModelGatewayClient:
    global _gateway_client
    if _gateway_client is None:
        _gateway_client = ModelGatewayClient()
    return _gateway_client


def get_generation_service(
        gateway: ModelGatewayClient = Depends(get_gateway_client),
        store: HistoryStore = Depends(get_history_store),
) -> GenerationService:
    return GenerationService(gateway, store)
