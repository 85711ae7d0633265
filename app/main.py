"""FastAPI application entrypoint. No business logic; only wiring and error translation."""

from dotenv import load_dotenv

load_dotenv()

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

from app.api.v1 import router as v1_router
from app.core.config import settings
from app.core.errors import AppError, AuthenticationError, AuthorizationError

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Sustainability Canvas API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """401/403 as {"error": message}; every other app error as plain text."""
    if isinstance(exc, AuthenticationError):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message},
            headers={"WWW-Authenticate": "Bearer"},
        )
    if isinstance(exc, AuthorizationError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})
    return PlainTextResponse(exc.message, status_code=exc.status_code)


def _describe_validation_error(exc: RequestValidationError) -> str:
    """Name the first offending request field in a short human-readable message."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part != "body"]
    error_type = first.get("type", "")
    if not loc:
        if error_type == "json_invalid":
            return "Invalid JSON body"
        return "Request body is empty"
    field = ".".join(loc)
    if error_type == "missing":
        return f"Missing required field: {field}"
    return f"Invalid value for field '{field}': {first.get('msg', 'invalid')}"


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return PlainTextResponse(
        _describe_validation_error(exc),
        status_code=status.HTTP_400_BAD_REQUEST,
    )


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Unhandled store error on %s %s", request.method, request.url.path)
    return PlainTextResponse(
        "An internal error occurred",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Sustainability Canvas API"}
