# FILE: sitebuilder/services/gateway_client.py

import asyncio
import logging
from typing import Any, Optional

from openai import OpenAI

from sitebuilder.core import config
from sitebuilder.core.errors import Unauthorized
from sitebuilder.services.gateway_errors import normalize_gateway_exception
from sitebuilder.services.generation_types import GenerationRequest
from sitebuilder.services.prompt_service import build_messages

logger = logging.getLogger("sitebuilder.gateway")


class ModelGatewayClient:
    """
    Sends exactly one chat completion to the hosted gateway per call.
    No retries here: max_retries=0 on the SDK, retry policy belongs to the caller.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Any = None,
    ):
        self.api_key = api_key
        self.base_url = base_url or config.AI_GATEWAY_BASE_URL
        self.model = model or config.AI_GATEWAY_MODEL
        self.timeout = timeout or config.AI_GATEWAY_TIMEOUT_SECONDS
        self._client = client

    def _get_client(self):
        if self._client is None:
            key = self.api_key or config.get_gateway_api_key()
            if not key:
                raise Unauthorized("AI gateway is not configured")
            self._client = OpenAI(
                api_key=key,
                base_url=self.base_url,
                timeout=self.timeout,
                max_retries=0,
            )
        return self._client

    async def generate(self, request: GenerationRequest) -> str:
        client = self._get_client()
        messages = build_messages(request)

        logger.info(
            "Generating website (backend=%s images=%s videos=%s files=%s): %s",
            request.include_backend,
            request.has_images,
            request.has_videos,
            request.has_files,
            request.prompt[:100],
        )

        def _call():
            return client.chat.completions.create(
                model=self.model,
                messages=messages,
            )

        try:
            response = await asyncio.to_thread(_call)
        except Exception as e:
            raise normalize_gateway_exception(e) from e

        choices = getattr(response, "choices", None) or []
        if not choices:
            return ""
        return choices[0].message.content or ""
