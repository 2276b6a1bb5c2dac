"""Exception handlers that turn failures into ``{"message": ...}`` JSON bodies.

Outside production, server errors also carry the exception text under ``error``
and domain errors carry their structured context under ``details``.
"""

import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers

from marketplace.exceptions import MarketplaceError
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


def _is_production() -> bool:
    return os.environ.get("PROTEAN_ENV") == "production"


def _with_diagnostics(body: dict, exc: Exception) -> dict:
    if not _is_production():
        body["error"] = f"{type(exc).__name__}: {exc}"
    return body


def flatten_messages(messages) -> str:
    """``{"email": ["is invalid"]}`` -> ``"email: is invalid"``."""
    if not isinstance(messages, dict):
        return str(messages)

    parts = []
    for field, errors in messages.items():
        text = ", ".join(str(e) for e in errors) if isinstance(errors, (list, tuple)) else str(errors)
        parts.append(f"{field}: {text}")
    return "; ".join(parts)


async def marketplace_error_handler(request: Request, exc: MarketplaceError) -> JSONResponse:
    body = {"message": exc.message}
    if exc.details and not _is_production():
        body["details"] = exc.details
    if exc.status_code >= 500:
        logger.error("request_failed", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content=body)


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"message": flatten_messages(exc.messages), "errors": exc.messages},
    )


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"field": ".".join(str(part) for part in error["loc"] if part != "body"), "message": error["msg"]}
        for error in exc.errors()
    ]
    message = "; ".join(f"{e['field']}: {e['message']}" if e["field"] else e["message"] for e in errors)
    return JSONResponse(status_code=400, content={"message": message or "Invalid request", "errors": errors})


async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content=_with_diagnostics({"message": "Resource not found"}, exc))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_error", path=request.url.path, method=request.method, exc_info=exc)
    return JSONResponse(status_code=500, content=_with_diagnostics({"message": "Internal server error"}, exc))


def register_error_handlers(app: FastAPI) -> None:
    """Install Protean's handlers, then the marketplace's own on top."""
    register_exception_handlers(app)

    app.add_exception_handler(MarketplaceError, marketplace_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
