"""Maps every failure to the client-visible error envelope.

Body shape: ``{"error": <label>, "detail": <message>, ...payload}``. Upstream
payload keys are merged at the top level, so a backend ``detail`` array
replaces the plain-text detail.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from stt_proxy.exceptions import ProxyError

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal server error"
REQUEST_ERROR = "Request error"
BAD_REQUEST = "Bad Request"
NOT_FOUND = "Not Found"


def error_label(status_code: int) -> str:
    return INTERNAL_ERROR if status_code >= 500 else REQUEST_ERROR


def error_body(
    status_code: int,
    message: str,
    payload: dict[str, Any] | None = None,
    label: str | None = None,
) -> dict[str, Any]:
    body: dict[str, Any] = {
        "error": label or error_label(status_code),
        "detail": message,
    }
    if payload:
        body.update(payload)
    return body


def normalize_error(exc: Exception) -> tuple[int, dict[str, Any]]:
    """
    Produces the status code and JSON body for any failure.

    Args:
        exc: The exception raised anywhere in the request chain.

    Returns:
        Tuple of (status_code, body).
    """
    if isinstance(exc, ProxyError):
        return exc.status_code, error_body(
            exc.status_code, exc.message, exc.payload, exc.label
        )

    if isinstance(exc, RequestValidationError):
        return 400, error_body(400, _validation_message(exc), label=BAD_REQUEST)

    if isinstance(exc, StarletteHTTPException):
        detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
        label = NOT_FOUND if exc.status_code == 404 else None
        return exc.status_code, error_body(exc.status_code, detail, label=label)

    return 500, error_body(500, INTERNAL_ERROR)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    return f"{location}: {message}" if location else message


async def _handle_proxy_error(request: Request, exc: ProxyError) -> JSONResponse:
    status_code, body = normalize_error(exc)
    log = logger.error if status_code >= 500 else logger.warning
    log(
        "Request failed",
        extra={
            "error": exc.message,
            "error_type": type(exc).__name__,
            "status_code": status_code,
            "url": str(request.url.path),
            "method": request.method,
        },
    )
    return JSONResponse(status_code=status_code, content=body)


async def _handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    status_code, body = normalize_error(exc)
    logger.warning(
        "Request validation failed",
        extra={"url": str(request.url.path), "method": request.method, "detail": body["detail"]},
    )
    return JSONResponse(status_code=status_code, content=body)


async def _handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    if exc.status_code == 404 and exc.detail == "Not Found":
        exc = StarletteHTTPException(
            status_code=404,
            detail=f"Route {request.method} {request.url.path} not found",
        )
    status_code, body = normalize_error(exc)
    return JSONResponse(status_code=status_code, content=body, headers=exc.headers)


async def _handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error",
        extra={
            "error": str(exc),
            "error_type": type(exc).__name__,
            "url": str(request.url.path),
            "method": request.method,
        },
    )
    status_code, body = normalize_error(exc)
    return JSONResponse(status_code=status_code, content=body)


def register_error_handlers(app: FastAPI) -> None:
    """Installs the error normalizer as the app's only error body writer."""
    app.add_exception_handler(ProxyError, _handle_proxy_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, _handle_http_exception)
    app.add_exception_handler(Exception, _handle_unexpected_error)
