# FILE: sitebuilder/services/generation_types.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class GenerationOptions:
    include_backend: bool = False
    has_images: bool = False
    has_videos: bool = False
    has_files: bool = False


@dataclass(frozen=True)
class GenerationRequest:
    """Transient: built per call, never stored on its own."""
    prompt: str
    include_backend: bool = False
    has_images: bool = False
    has_videos: bool = False
    has_files: bool = False


@dataclass(frozen=True)
class EdgeFunction:
    name: str
    description: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "description": self.description}


@dataclass(frozen=True)
class GenerationResult:
    markup: str
    has_backend: bool = False
    backend_code: Optional[str] = None
    database_schema: Optional[str] = None
    edge_functions: Optional[Tuple[EdgeFunction, ...]] = None

    def edge_functions_as_dicts(self) -> Optional[List[Dict[str, str]]]:
        if self.edge_functions is None:
            return None
        return [fn.to_dict() for fn in self.edge_functions]


@dataclass(frozen=True)
class HistoryRecord:
    id: str
    owner_id: str
    prompt: str
    result: GenerationResult
    created_at: datetime
    website_url: Optional[str] = None

    @classmethod
    def from_row(cls, row: Any) -> "HistoryRecord":
        edge_functions = None
        if row.edge_functions is not None:
            edge_functions = tuple(
                EdgeFunction(name=str(fn.get("name", "")), description=str(fn.get("description", "")))
                for fn in row.edge_functions
                if isinstance(fn, dict)
            )
        return cls(
            id=row.id,
            owner_id=row.user_id,
            prompt=row.prompt,
            result=GenerationResult(
                markup=row.generated_code,
                has_backend=bool(row.has_backend),
                backend_code=row.backend_code,
                database_schema=row.database_schema,
                edge_functions=edge_functions,
            ),
            created_at=row.created_at,
            website_url=row.website_url,
        )

    def created_at_iso(self) -> str:
        return self.created_at.replace(tzinfo=timezone.utc).isoformat()


@dataclass(frozen=True)
class GenerationOutcome:
    """What the pipeline hands back: the result always, the record only if saving worked."""
    result: GenerationResult
    record: Optional[HistoryRecord] = None
    saved: bool = False
    warnings: List[str] = field(default_factory=list)
