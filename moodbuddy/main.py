"""
FastAPI entrypoint for the Moodbuddy backend application.
"""
import logging
import traceback
from datetime import datetime, timezone
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from moodbuddy.core.config import settings
from moodbuddy.core.exceptions import APIException, field_error
from moodbuddy.core.utils import error_response, success_response
from moodbuddy.api.router import api_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Moodbuddy API",
    description="Backend API for daily mood journaling",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


def _field_name(loc) -> str:
    """Drop the request part ("body", "query") from a pydantic error location."""
    parts = [str(part) for part in loc if part not in ("body", "query", "path")]
    return ".".join(parts) or "body"


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Render pydantic errors as a 400 with one message per field."""
    errors = [
        field_error(_field_name(err["loc"]), err["msg"].removeprefix("Value error, "))
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content=error_response("Validation failed", errors=errors))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render API and routing errors in the response envelope."""
    if isinstance(exc, APIException):
        content = error_response(exc.message, errors=exc.errors)
    elif exc.status_code == 404:
        content = error_response(f"Route {request.url.path} not found")
    else:
        content = error_response(str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Last resort: log and return a 500. Tracebacks are only included in development."""
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    extra = {}
    if settings.ENVIRONMENT == "development" and settings.DEBUG:
        extra["stack"] = traceback.format_exception(type(exc), exc, exc.__traceback__)
    return JSONResponse(status_code=500, content=error_response("Server Error", **extra))


@app.get("/")
async def root():
    """Root endpoint."""
    return success_response(message=f"{settings.APP_NAME} API is running")


@app.get("/health")
@app.get("/api/health")
async def health():
    """Health check endpoint."""
    return success_response(
        message=f"{settings.APP_NAME} API is running!",
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=settings.ENVIRONMENT
    )
