"""
Application lifespan: configuration checks on startup, pool shutdown on exit.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from shared.config.logging import rest_api_logger as logger, setup_logging
from shared.config.settings import settings
from shared.infrastructure.db import engine


def check_configuration() -> None:
    """
    Log configuration problems; refuse to start on them in production.
    The schema is not touched here (see `cli.py init-db`).
    """
    problems = settings.validate_production_secrets()
    for problem in problems:
        logger.error("Configuration error: %s", problem)

    if problems and settings.environment == "production":
        raise RuntimeError("Refusing to start with insecure configuration: " + "; ".join(problems))
    if problems:
        logger.warning("Insecure defaults in use; acceptable for development only")


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    check_configuration()

    logger.info(
        "REST API starting",
        port=settings.rest_api_port,
        env=settings.environment,
        request_timeout_seconds=settings.request_timeout_seconds,
    )

    yield

    logger.info("REST API shutting down")
    await engine.dispose()
