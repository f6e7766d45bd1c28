# FILE: sitebuilder/services/gateway_errors.py
from __future__ import annotations

import logging
from typing import Any, Optional

import openai

from sitebuilder.core.errors import (
    GatewayError,
    GatewayFailure,
    PaymentRequired,
    RateLimited,
    TransportError,
    Unauthorized,
)

logger = logging.getLogger("sitebuilder.gateway")

MAX_LOGGED_BODY = 4000


def _safe_str(x: Any) -> str:
    try:
        return str(x)
    except Exception:
        return "<unprintable>"


def _upstream_body(err: openai.APIStatusError) -> str:
    response = getattr(err, "response", None)
    if response is not None:
        try:
            return response.text[:MAX_LOGGED_BODY]
        except Exception:
            pass
    return _safe_str(getattr(err, "body", None) or err)[:MAX_LOGGED_BODY]


def _from_status(status: Optional[int]) -> GatewayFailure:
    if status in (401, 403):
        return Unauthorized()
    if status == 429:
        return RateLimited()
    if status == 402:
        return PaymentRequired()
    return GatewayError(upstream_status=status)


def normalize_gateway_exception(err: Exception) -> GatewayFailure:
    """
    Map an SDK/transport exception to the domain error the caller sees.
    Upstream bodies are logged here and never copied into the message.
    """
    if isinstance(err, GatewayFailure):
        return err

    # APITimeoutError subclasses APIConnectionError
    if isinstance(err, openai.APIConnectionError):
        logger.warning("AI gateway transport failure: %s", _safe_str(err)[:MAX_LOGGED_BODY])
        return TransportError()

    if isinstance(err, openai.APIStatusError):
        status = getattr(err, "status_code", None)
        mapped = _from_status(status)
        if isinstance(mapped, GatewayError):
            logger.error("AI gateway error: %s %s", status, _upstream_body(err))
        else:
            logger.warning("AI gateway refused request: %s (%s)", status, mapped.code)
        return mapped

    logger.error("AI gateway call failed unexpectedly: %s", _safe_str(err)[:MAX_LOGGED_BODY])
    return GatewayError()
