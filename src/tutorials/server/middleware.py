"""Request context, CORS and error handling for the Tutorials server.

Every error response has the shape ``{"error", "message", "request_id"}`` so a
client can quote the request ID that also appears in the access log.
"""

from __future__ import annotations

import logging
import time
import uuid
from http import HTTPStatus
from typing import Callable, Optional

try:
    from fastapi import FastAPI, Request, Response
    from fastapi.exceptions import RequestValidationError
    from fastapi.middleware.cors import CORSMiddleware
    from fastapi.responses import JSONResponse
    from starlette.exceptions import HTTPException as StarletteHTTPException
    from starlette.middleware.base import BaseHTTPMiddleware
    from starlette.types import ASGIApp
except ImportError:
    raise ImportError("FastAPI is required. Install with: pip install tutorials[server]")

from tutorials.exceptions import TutorialNotFoundError
from tutorials.server.logging_config import ACCESS_LOGGER

logger = logging.getLogger(__name__)
access_logger = logging.getLogger(ACCESS_LOGGER)

REQUEST_ID_HEADER = "X-Request-Id"


def _request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None)


def _error_code(status_code: int) -> str:
    """``404`` -> ``"not_found"``, ``500`` -> ``"internal_server_error"``."""
    return HTTPStatus(status_code).phrase.lower().replace(" ", "_")


def _error_response(request: Request, status_code: int, message: str, error: Optional[str] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error or _error_code(status_code),
            "message": message,
            "request_id": _request_id(request),
        },
    )


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assign or propagate the request ID and write the access log line."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request.state.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex

        start = time.monotonic()
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request.state.request_id

        access_logger.info(
            "%s %s -> %d",
            request.method,
            request.url.path,
            response.status_code,
            extra={
                "request_id": request.state.request_id,
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "latency_ms": round((time.monotonic() - start) * 1000, 2),
            },
        )
        return response


class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    """Refuse tutorial payloads whose declared Content-Length is over the limit."""

    def __init__(self, app: ASGIApp, max_body_size: int) -> None:
        super().__init__(app)
        self.max_body_size = max_body_size

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        declared = request.headers.get("content-length", "")
        if declared.isdigit() and int(declared) > self.max_body_size:
            return _error_response(
                request,
                413,
                f"Tutorial payload exceeds {self.max_body_size} bytes.",
                error="request_too_large",
            )
        return await call_next(request)


# ── Error Handlers ─────────────────────────────────────────────────


async def _tutorial_not_found(request: Request, exc: TutorialNotFoundError) -> JSONResponse:
    return _error_response(request, 404, str(exc))


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(request, exc.status_code, str(exc.detail))


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if any(e.get("type") == "json_invalid" for e in errors):
        return _error_response(request, 400, "Request body contains invalid JSON.", error="malformed_json")

    # loc is ("path", "tutorial_id"), ("body", "title") or just ("body",)
    message = "; ".join(
        f"{'.'.join(str(part) for part in e['loc'][1:]) or e['loc'][0]}: {e['msg']}" for e in errors
    )
    return _error_response(request, 422, message, error="validation_error")


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", extra={"request_id": _request_id(request)})
    return _error_response(request, 500, "An internal server error occurred.")


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TutorialNotFoundError, _tutorial_not_found)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(Exception, _unhandled_error)


def install_middleware(app: FastAPI) -> None:
    """Install all middleware on the app."""
    from tutorials.server.config import settings

    # Order matters: outermost runs first (added last)
    app.add_middleware(BodySizeLimitMiddleware, max_body_size=settings.max_body_size)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)
    install_error_handlers(app)
