# FILE: sitebuilder/api/generate.py

import logging

from fastapi import APIRouter, Depends, Response

from sitebuilder.api.deps import get_current_owner, get_generation_service
from sitebuilder.core.cors import CORS_HEADERS
from sitebuilder.schemas.generate import ErrorResponse, GenerateWebsiteRequest, GenerateWebsiteResponse
from sitebuilder.services.generation_service import GenerationService

router = APIRouter(prefix="/api", tags=["generate"])
logger = logging.getLogger("sitebuilder.generate")

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    402: {"model": ErrorResponse},
    429: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.options("/generate-website", include_in_schema=False)
async def generate_website_preflight():
    return Response(status_code=200, headers=CORS_HEADERS)


@router.post("/generate-website", response_model=GenerateWebsiteResponse, responses=ERROR_RESPONSES)
async def generate_website(
        payload: GenerateWebsiteRequest,
        owner_id: str = Depends(get_current_owner),
        service: GenerationService = Depends(get_generation_service),
):
    logger.info("Generating website for user %s: %s...", owner_id, payload.prompt[:100])
    outcome = await service.generate(owner_id, payload.prompt, payload.to_options())
    return GenerateWebsiteResponse.from_outcome(outcome)
