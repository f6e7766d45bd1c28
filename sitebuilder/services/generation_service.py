# FILE: sitebuilder/services/generation_service.py

import logging
from typing import Optional

from sitebuilder.core.errors import PersistenceError
from sitebuilder.services.gateway_client import ModelGatewayClient
from sitebuilder.services.generation_types import GenerationOptions, GenerationOutcome
from sitebuilder.services.history_store import HistoryStore
from sitebuilder.services.request_builder import build_request
from sitebuilder.services.result_negotiator import negotiate

logger = logging.getLogger("sitebuilder.generate")

SAVE_FAILED_WARNING = "Website generated, but it could not be saved to your history."


class GenerationService:
    """
    Builder -> gateway -> negotiator -> store, one await after the other.
    Gateway failures propagate and nothing is stored. A failed save is
    logged and reported through `saved=False`; the result is still returned.
    """

    def __init__(self, gateway: ModelGatewayClient, store: HistoryStore):
        self.gateway = gateway
        self.store = store

    async def generate(
            self,
            owner_id: str,
            prompt: str,
            options: Optional[GenerationOptions] = None,
    ) -> GenerationOutcome:
        request = build_request(prompt, options)

        raw = await self.gateway.generate(request)
        result = negotiate(raw, request.include_backend)

        try:
            record = await self.store.append(owner_id, request.prompt, result)
        except PersistenceError:
            logger.error("Generation for user %s delivered without a history record", owner_id)
            return GenerationOutcome(result=result, record=None, saved=False, warnings=[SAVE_FAILED_WARNING])

        return GenerationOutcome(result=result, record=record, saved=True)
