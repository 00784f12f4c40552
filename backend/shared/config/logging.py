"""
Structured logging for the backend.

Loggers obtained through get_logger() accept keyword context next to the
message:

    logger.info("Order created", order_id=12, restaurant=3)

The context travels on the record as ``record.context`` and is rendered as a
JSON object in production or as ``key=value`` pairs in development. Every
record also carries the request correlation ID set by
shared.infrastructure.correlation.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from shared.config.settings import settings


def _request_id(record: logging.LogRecord) -> str | None:
    request_id = getattr(record, "request_id", None)
    if request_id and request_id != "-":
        return request_id
    return None


class StructuredFormatter(logging.Formatter):
    """One JSON object per line, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "env": settings.environment,
        }

        request_id = _request_id(record)
        if request_id:
            entry["request_id"] = request_id

        context = getattr(record, "context", None)
        if context:
            entry["context"] = context

        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)

        if settings.debug:
            entry["at"] = f"{record.pathname}:{record.lineno} in {record.funcName}"

        return json.dumps(entry, default=str)


class DevelopmentFormatter(logging.Formatter):
    """Single coloured line per record, context appended as key=value."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }
    RESET = "\033[0m"
    DIM = "\033[2m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, "")
        clock = datetime.fromtimestamp(record.created).strftime("%H:%M:%S.%f")[:-3]

        parts = [f"{self.DIM}{clock}{self.RESET}", f"{color}{record.levelname:<7}{self.RESET}"]
        request_id = _request_id(record)
        if request_id:
            parts.append(f"{self.DIM}{request_id[:8]}{self.RESET}")
        parts.append(f"{record.name}: {record.getMessage()}")

        context = getattr(record, "context", None)
        if context:
            parts.append(" ".join(f"{key}={value!r}" for key, value in context.items()))

        line = " ".join(parts)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class StructuredLogger(logging.Logger):
    """
    Logger whose methods take arbitrary keyword context.

    Standard keywords (exc_info, extra, stack_info, stacklevel) keep their
    usual meaning; anything else lands in ``record.context``.
    """

    def _log(
        self,
        level: int,
        msg: object,
        args: Any,
        exc_info: Any = None,
        extra: dict[str, Any] | None = None,
        stack_info: bool = False,
        stacklevel: int = 1,
        **context: Any,
    ) -> None:
        extra = dict(extra or {})
        extra["context"] = context or None
        super()._log(
            level,
            msg,
            args,
            exc_info=exc_info,
            extra=extra,
            stack_info=stack_info,
            stacklevel=stacklevel + 1,
        )


# Loggers created from here on are StructuredLoggers
logging.setLoggerClass(StructuredLogger)


def _resolve_level() -> int:
    if settings.log_level:
        return logging.getLevelName(settings.log_level.upper())
    return logging.DEBUG if settings.debug else logging.INFO


def setup_logging() -> None:
    """
    Configure the root handler. Call once at process start
    (application lifespan or CLI entry).
    """
    # Import here to avoid circular imports
    from shared.infrastructure.correlation import CorrelationIdFilter

    level = _resolve_level()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(
        StructuredFormatter() if settings.environment == "production" else DevelopmentFormatter()
    )

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    # Third-party noise
    for name in ("uvicorn.access", "sqlalchemy.engine", "aiosqlite"):
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger.

    Usage:
        from shared.config.logging import get_logger
        logger = get_logger(__name__)

        logger.info("Order updated", order_id=123, status="COMPLETED")
        logger.error("Failed to build full order info", order_id=456, exc_info=True)
    """
    return logging.getLogger(name)  # type: ignore[return-value]


# Pre-configured loggers for common modules
rest_api_logger = get_logger("rest_api")
orders_logger = get_logger("rest_api.orders")
auth_logger = get_logger("rest_api.auth")
