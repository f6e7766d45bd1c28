# FILE: sitebuilder/server.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from sitebuilder.api import generate, history, history_ws
from sitebuilder.api.deps import get_history_feed
from sitebuilder.core.cors import CORS_ALLOW_HEADERS, CORS_ALLOW_ORIGINS, PreflightCORSMiddleware
from sitebuilder.core.database import engine, init_db
from sitebuilder.core.errors import InvalidInput, SiteBuilderError
from sitebuilder.core.logging_config import configure_logging

configure_logging()
logger = logging.getLogger("sitebuilder.server")

app = FastAPI(title="AI Website Builder API")


@app.exception_handler(SiteBuilderError)
async def sitebuilder_error_handler(request: Request, exc: SiteBuilderError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_http_detail())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    logger.info("%s %s rejected: %s", request.method, request.url.path, errors)
    if any(e.get("type") == "json_invalid" for e in errors):
        message = "Request body must be valid JSON"
    elif any("prompt" in e.get("loc", ()) for e in errors):
        message = InvalidInput.default_message
    else:
        message = "Invalid request body"
    return JSONResponse(status_code=InvalidInput.status_code, content={"error": message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@app.get("/api/")
async def api_root():
    return {"message": "AI Website Builder API"}


app.include_router(generate.router)
app.include_router(history.router)
app.include_router(history_ws.router)

app.add_middleware(
    PreflightCORSMiddleware,
    allow_credentials=False,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=CORS_ALLOW_HEADERS,
)


@app.on_event("startup")
async def startup_db():
    await init_db()


@app.on_event("shutdown")
async def shutdown():
    await get_history_feed().close()
    await engine.dispose()
