"""Translation of raised exceptions into JSON error responses.

Every failure that reaches the HTTP boundary is classified here:

* photo not found and explicit HTTP errors keep their own status,
* timeouts become 504 Gateway Timeout,
* malformed input and validation failures become 400 Bad Request,
* everything else becomes 500 Internal Server Error.

The error body is ``{"status": <int>, "error": <str | null>}``; a failure
without a message keeps ``null`` rather than an empty string.
"""

import logging
from collections.abc import Awaitable, Callable, Sequence
from http import HTTPStatus
from typing import Any

import httpx
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from photo_uploader.domain.errors import PhotoNotFoundError

_logger = logging.getLogger(__name__)

_HANDLED_EXCEPTIONS: tuple[type[Exception], ...] = (
    StarletteHTTPException,
    RequestValidationError,
    PhotoNotFoundError,
    TimeoutError,
    httpx.TimeoutException,
    ValueError,
)


class ErrorResponse(BaseModel):
    """JSON body returned for failed requests."""

    status: int
    error: str | None


def classify_exception(exc: Exception) -> tuple[int, str | None]:
    """Return the HTTP status and message for a raised exception."""
    if isinstance(exc, PhotoNotFoundError):
        return HTTPStatus.NOT_FOUND, _message(exc)
    if isinstance(exc, StarletteHTTPException):
        return exc.status_code, _detail(exc.detail)
    if isinstance(exc, (TimeoutError, httpx.TimeoutException)):
        return HTTPStatus.GATEWAY_TIMEOUT, _message(exc)
    if isinstance(exc, (RequestValidationError, ValidationError)):
        return HTTPStatus.BAD_REQUEST, _validation_message(exc.errors())
    if isinstance(exc, ValueError):
        return HTTPStatus.BAD_REQUEST, _message(exc)
    return HTTPStatus.INTERNAL_SERVER_ERROR, _message(exc)


def error_response(request: Request, exc: Exception) -> JSONResponse:
    """Log a failure at a severity matching its class and build the response."""
    status, message = classify_exception(exc)
    status_code = int(status)
    if status_code >= HTTPStatus.INTERNAL_SERVER_ERROR:
        _logger.error(
            "%s %s failed: %s",
            request.method,
            request.url.path,
            message,
            exc_info=exc,
        )
    else:
        _logger.warning(
            "%s %s rejected (%s): %s",
            request.method,
            request.url.path,
            status_code,
            message,
        )
    body = ErrorResponse(status=status_code, error=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def handle_exception(request: Request, exc: Exception) -> JSONResponse:
    """Exception handler for exception types FastAPI routes to handlers."""
    return error_response(request, exc)


async def handle_broad_exceptions(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Middleware that turns any unhandled exception into an error response."""
    try:
        return await call_next(request)
    except Exception as exc:
        return error_response(request, exc)


def install_exception_handlers(app: FastAPI) -> None:
    """Register the error classification on an application."""
    for exc_class in _HANDLED_EXCEPTIONS:
        app.add_exception_handler(exc_class, handle_exception)
    app.middleware("http")(handle_broad_exceptions)


def _message(exc: BaseException) -> str | None:
    """Return the exception message, or ``None`` when it was raised without one."""
    if not exc.args:
        return None
    return str(exc)


def _detail(detail: Any) -> str | None:
    if detail is None or isinstance(detail, str):
        return detail
    return str(detail)


def _validation_message(errors: Sequence[Any]) -> str | None:
    """Flatten pydantic validation errors into a single readable message."""
    messages = []
    for error in errors:
        ctx = error.get("ctx") or {}
        if error.get("type") == "value_error" and "error" in ctx:
            text = str(ctx["error"])
        else:
            text = str(error.get("msg", ""))
        location = ".".join(str(part) for part in error.get("loc", ()))
        messages.append(f"{location}: {text}" if location else text)
    return "; ".join(messages) or None
