# FILE: sitebuilder/core/errors.py
from typing import Any, Dict


class SiteBuilderError(Exception):
    """
    Base for every failure the pipeline reports to a caller.
    `message` is user-facing. Raw upstream/database detail belongs in logs.
    """

    code: str = "INTERNAL"
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_http_detail(self) -> Dict[str, Any]:
        return {"error": self.message}


class InvalidInput(SiteBuilderError):
    code = "INVALID_INPUT"
    status_code = 400
    default_message = "Please describe your website"


# ---------- gateway ----------

class GatewayFailure(SiteBuilderError):
    code = "GATEWAY"
    default_message = "AI gateway error"


class Unauthorized(GatewayFailure):
    code = "UNAUTHORIZED"
    default_message = "AI gateway credential is missing or was rejected"


class RateLimited(GatewayFailure):
    code = "RATE_LIMITED"
    status_code = 429
    default_message = "Rate limits exceeded, please try again later."


class PaymentRequired(GatewayFailure):
    code = "PAYMENT_REQUIRED"
    status_code = 402
    default_message = "Payment required, please add funds to your AI workspace."


class GatewayError(GatewayFailure):
    code = "GATEWAY_ERROR"
    default_message = "AI gateway error"

    def __init__(self, message: str = None, upstream_status: int = None):
        super().__init__(message)
        self.upstream_status = upstream_status


class TransportError(GatewayFailure):
    code = "TRANSPORT"
    default_message = "Could not reach the AI gateway. Try again."


# ---------- history ----------

class PersistenceError(SiteBuilderError):
    code = "PERSISTENCE"
    default_message = "History storage failed"


class NotFound(SiteBuilderError):
    code = "NOT_FOUND"
    status_code = 404
    default_message = "Generation not found"
