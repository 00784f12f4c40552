"""
Request correlation.

Each request gets an ID, taken from the caller's X-Request-ID header when it
looks sane and generated otherwise. The ID is stored in a context variable
for the log filter, exposed on ``request.state.request_id`` and echoed back
in the response headers. Completed requests are logged with their timing.
"""

import logging
import re
import time
import uuid
from contextvars import ContextVar
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from shared.config.logging import get_logger

logger = get_logger(__name__)

# Task-local; empty outside a request
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Incoming IDs end up in log lines
_ACCEPTED_REQUEST_ID = re.compile(r"[A-Za-z0-9._:-]{1,128}")


def get_request_id() -> str:
    """Get the current request ID."""
    return request_id_var.get()


def resolve_request_id(header_value: str | None) -> str:
    """Caller-provided ID if well formed, a fresh UUID4 otherwise."""
    if header_value and _ACCEPTED_REQUEST_ID.fullmatch(header_value):
        return header_value
    return str(uuid.uuid4())


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Bind a request ID to the request, its logs and its response."""

    HEADER_NAME = "X-Request-ID"

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = resolve_request_id(request.headers.get(self.HEADER_NAME))
        token = request_id_var.set(request_id)
        request.state.request_id = request_id
        started = time.perf_counter()

        try:
            response = await call_next(request)
            response.headers[self.HEADER_NAME] = request_id
            logger.debug(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 1),
            )
            return response
        finally:
            request_id_var.reset(token)


class CorrelationIdFilter(logging.Filter):
    """
    Logging filter that stamps ``record.request_id`` ("-" outside requests).

    Usage:
        handler = logging.StreamHandler()
        handler.addFilter(CorrelationIdFilter())
    """

    def filter(self, record) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True
