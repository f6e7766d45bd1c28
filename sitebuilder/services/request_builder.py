# FILE: sitebuilder/services/request_builder.py
from typing import Optional

from sitebuilder.core.errors import InvalidInput
from sitebuilder.services.generation_types import GenerationOptions, GenerationRequest


def build_request(prompt: str, options: Optional[GenerationOptions] = None) -> GenerationRequest:
    """
    Turn a user prompt + option flags into the single outbound request.
    The prompt is kept verbatim; only blank prompts are rejected.
    """
    if not prompt or not prompt.strip():
        raise InvalidInput()

    opts = options or GenerationOptions()
    return GenerationRequest(
        prompt=prompt,
        include_backend=bool(opts.include_backend),
        has_images=bool(opts.has_images),
        has_videos=bool(opts.has_videos),
        has_files=bool(opts.has_files),
    )
