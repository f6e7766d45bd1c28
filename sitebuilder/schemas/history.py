from typing import List, Optional
from pydantic import BaseModel, ConfigDict

from sitebuilder.schemas.generate import EdgeFunctionItem
from sitebuilder.services.generation_types import HistoryRecord


class HistoryItem(BaseModel):
    model_config = ConfigDict(extra="ignore")
    id: str
    user_id: str
    prompt: str
    generated_code: str
    has_backend: bool
    backend_code: Optional[str] = None
    database_schema: Optional[str] = None
    edge_functions: Optional[List[EdgeFunctionItem]] = None
    website_url: Optional[str] = None
    created_at: str

    @classmethod
    def from_record(cls, record: HistoryRecord) -> "HistoryItem":
        result = record.result
        return cls(
            id=record.id,
            user_id=record.owner_id,
            prompt=record.prompt,
            generated_code=result.markup,
            has_backend=result.has_backend,
            backend_code=result.backend_code,
            database_schema=result.database_schema,
            edge_functions=result.edge_functions_as_dicts(),
            website_url=record.website_url,
            created_at=record.created_at_iso(),
        )


class HistoryList(BaseModel):
    items: List[HistoryItem]
