# =========================================================
# FILE: /sitebuilder/schemas/generate.py
# =========================================================

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, validator

from sitebuilder.services.generation_types import GenerationOptions, GenerationOutcome


class EdgeFunctionItem(BaseModel):
    name: str
    description: str = ""


class GenerateWebsiteRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    prompt: str
    include_backend: bool = Field(False, alias="includeBackend")
    has_images: bool = Field(False, alias="hasImages")
    has_videos: bool = Field(False, alias="hasVideos")
    has_files: bool = Field(False, alias="hasFiles")

    @validator("prompt", pre=True)
    def _prompt_as_text(cls, value):
        return "" if value is None else value

    def to_options(self) -> GenerationOptions:
        return GenerationOptions(
            include_backend=self.include_backend,
            has_images=self.has_images,
            has_videos=self.has_videos,
            has_files=self.has_files,
        )


class GenerateWebsiteResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    code: str
    has_backend: bool = Field(False, alias="hasBackend")
    backend_code: Optional[str] = Field(None, alias="backendCode")
    database_schema: Optional[str] = Field(None, alias="databaseSchema")
    edge_functions: Optional[List[EdgeFunctionItem]] = Field(None, alias="edgeFunctions")
    history_id: Optional[str] = Field(None, alias="historyId")
    saved: bool = False
    warning: Optional[str] = None

    @classmethod
    def from_outcome(cls, outcome: GenerationOutcome) -> "GenerateWebsiteResponse":
        result = outcome.result
        return cls(
            code=result.markup,
            has_backend=result.has_backend,
            backend_code=result.backend_code,
            database_schema=result.database_schema,
            edge_functions=result.edge_functions_as_dicts(),
            history_id=outcome.record.id if outcome.record else None,
            saved=outcome.saved,
            warning=outcome.warnings[0] if outcome.warnings else None,
        )


class ErrorResponse(BaseModel):
    error: str
