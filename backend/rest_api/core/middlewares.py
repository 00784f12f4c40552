"""
HTTP middlewares for the FastAPI application.
Implements request timeouts, security headers and request correlation.
"""

import asyncio

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from shared.config.logging import rest_api_logger as logger
from shared.infrastructure.correlation import CorrelationIdMiddleware


class RequestTimeoutMiddleware(BaseHTTPMiddleware):
    """
    Abort requests that run longer than ``timeout_seconds`` with 504.

    The handler task is cancelled, so the request's database session is
    closed and its uncommitted work rolled back.
    """

    def __init__(self, app, timeout_seconds: float):
        super().__init__(app)
        self.timeout_seconds = timeout_seconds

    async def dispatch(self, request: Request, call_next):
        try:
            return await asyncio.wait_for(call_next(request), timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            logger.error(
                "Request timed out",
                path=request.url.path,
                method=request.method,
                timeout_seconds=self.timeout_seconds,
            )
            return JSONResponse(
                status_code=504,
                content={"detail": f"Request exceeded {self.timeout_seconds}s timeout"},
            )


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Add security headers to all responses:
    nosniff, frame denial, strict referrer policy; HSTS in production.
    """

    async def dispatch(self, request: Request, call_next):
        from shared.config.settings import settings

        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if "server" in response.headers:
            del response.headers["server"]

        if settings.environment == "production":
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )

        return response


def register_middlewares(app: FastAPI, timeout_seconds: float) -> None:
    """
    Register middlewares on the FastAPI application.

    Middlewares run in reverse order of registration: correlation first,
    so the timeout log line carries the request id.
    """
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestTimeoutMiddleware, timeout_seconds=timeout_seconds)
    app.add_middleware(CorrelationIdMiddleware)
