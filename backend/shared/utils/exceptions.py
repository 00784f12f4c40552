"""
Centralized domain exceptions with consistent HTTP mapping.

Repositories and services raise these directly; they propagate untranslated
to FastAPI, which renders ``{"detail": ...}`` with the mapped status code.

Usage:
    from shared.utils.exceptions import NotFoundError, NoPlaceError

    raise NotFoundError("Order", order_id)
    raise NoPlaceError(restaurant_id)
"""

from typing import Any

from fastapi import HTTPException, status

from shared.config.constants import ErrorMessages
from shared.config.logging import get_logger

logger = get_logger(__name__)


class AppException(HTTPException):
    """
    Base exception with automatic logging.

    All custom exceptions should inherit from this class
    to ensure consistent logging and response format.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        log_level: str = "warning",
        headers: dict[str, str] | None = None,
        **log_context: Any,
    ):
        log_fn = getattr(logger, log_level, logger.warning)
        log_fn(detail, status_code=status_code, **log_context)

        super().__init__(status_code=status_code, detail=detail, headers=headers)

    @property
    def message(self) -> str:
        return self.detail


# =============================================================================
# 404 Not Found Errors
# =============================================================================


class NotFoundError(AppException):
    """
    Entity not found by id or by cross-reference (404).

    Usage:
        raise NotFoundError("Order", 123)
    """

    def __init__(self, entity: str, entity_id: int | str | None = None, **log_context: Any):
        if entity_id is not None:
            detail = ErrorMessages.ENTITY_NOT_FOUND.format(entity=entity, entity_id=entity_id)
        else:
            detail = f"{entity} not found."

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            entity=entity,
            entity_id=entity_id,
            **log_context,
        )


# =============================================================================
# 400 Bad Request Errors
# =============================================================================


class InvalidArgumentError(AppException):
    """Required creation properties are missing or have the wrong shape (400)."""

    def __init__(self, detail: str = ErrorMessages.PROPERTIES_NOT_SET, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            **log_context,
        )


class IncorrectOrderParametersError(AppException):
    """
    Order values are present but semantically invalid (400).

    Usage:
        raise IncorrectOrderParametersError("Unknown order status 'DONE'", field="status")
    """

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            **log_context,
        )


class NoPlaceError(AppException):
    """The restaurant has no free capacity for the requested visit time (400)."""

    def __init__(self, restaurant_id: int, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=ErrorMessages.NO_PLACE.format(restaurant=restaurant_id),
            restaurant_id=restaurant_id,
            **log_context,
        )


# =============================================================================
# 409 Conflict Errors
# =============================================================================


class AlreadyExistsError(AppException):
    """A conflicting unique resource already exists (409)."""

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            **log_context,
        )


# =============================================================================
# Corrupt stored data
# =============================================================================


class MalformedVisitTimeError(ValueError):
    """A stored visit time range literal could not be parsed."""

    def __init__(self, raw: object, reason: str):
        self.raw = raw
        self.reason = reason
        super().__init__(f"Malformed visit time {raw!r}: {reason}")
