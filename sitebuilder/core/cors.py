# sitebuilder/core/cors.py
from starlette.datastructures import Headers
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import Response

CORS_ALLOW_ORIGINS = ["*"]

CORS_ALLOW_HEADERS = [
    "authorization",
    "x-client-info",
    "client-info",
    "apikey",
    "api-key",
    "content-type",
]

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": ", ".join(CORS_ALLOW_HEADERS),
}


class PreflightCORSMiddleware(CORSMiddleware):
    """CORSMiddleware whose browser preflight answers carry no body."""

    def preflight_response(self, request_headers: Headers) -> Response:
        response = super().preflight_response(request_headers)
        headers = {
            k: v for k, v in response.headers.items()
            if k.lower() not in ("content-length", "content-type")
        }
        return Response(status_code=response.status_code, headers=headers)
