"""
CORS configuration for browser clients of the orders API.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config.settings import settings


# Front-end dev servers
DEV_ORIGINS = (
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
)

ORDER_API_METHODS = ["GET", "POST", "PATCH", "OPTIONS"]
ORDER_API_HEADERS = ["Authorization", "Content-Type", "Accept", "X-Request-ID"]


def get_cors_origins() -> list[str]:
    """
    Origins from ALLOWED_ORIGINS (comma-separated, trailing slashes dropped),
    or the dev servers when it is empty.
    """
    if not settings.allowed_origins:
        return list(DEV_ORIGINS)
    origins = (origin.strip().rstrip("/") for origin in settings.allowed_origins.split(","))
    return [origin for origin in origins if origin]


def configure_cors(app: FastAPI) -> None:
    """Attach CORSMiddleware. A "*" origin disables credentials."""
    origins = get_cors_origins()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=ORDER_API_METHODS,
        allow_headers=ORDER_API_HEADERS,
        expose_headers=["X-Request-ID"],
        max_age=0 if settings.environment == "development" else 600,
    )
