"""Map domain exceptions to HTTP responses.

Every error response carries an ``error`` message. Validation failures also
carry the per-field ``details`` the domain reported.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger(__name__)


def error_message(exc) -> str:
    messages = getattr(exc, "messages", None) or str(exc)
    if isinstance(messages, dict):
        flat = []
        for value in messages.values():
            flat.extend(value if isinstance(value, list | tuple) else [value])
        return "; ".join(str(m) for m in flat)
    return str(messages)


def _respond(request: Request, exc, status_code: int, **extra) -> JSONResponse:
    message = error_message(exc)
    logger.warning(
        "Request failed",
        path=request.url.path,
        method=request.method,
        status_code=status_code,
        error=message,
    )
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    details = exc.messages if isinstance(exc.messages, dict) else None
    return _respond(request, exc, 400, details=details)


async def _not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return _respond(request, exc, 404)


async def _forbidden(request: Request, exc: InvalidOperationError) -> JSONResponse:
    return _respond(request, exc, 403)


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _respond(request, exc.detail, exc.status_code)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(ObjectNotFoundError, _not_found)
    app.add_exception_handler(InvalidOperationError, _forbidden)
    app.add_exception_handler(StarletteHTTPException, _http_error)
