"""
Centralized constants for the backend application.
Avoid magic strings for roles and order statuses.

Usage:
    from shared.config.constants import Roles, OrderStatus, ORDER_OPERATOR_ROLES

    if status == OrderStatus.CANCELED:
        ...
"""

from typing import Final


# =============================================================================
# User Roles
# =============================================================================


class Roles:
    """User role constants."""

    ADMIN: Final[str] = "ADMIN"
    MANAGER: Final[str] = "MANAGER"
    COOK: Final[str] = "COOK"
    WAITER: Final[str] = "WAITER"
    CLIENT: Final[str] = "CLIENT"

    ALL: Final[list[str]] = [ADMIN, MANAGER, COOK, WAITER, CLIENT]


# Roles allowed to change an order after it was placed
ORDER_OPERATOR_ROLES: Final[frozenset[str]] = frozenset({Roles.MANAGER, Roles.COOK, Roles.WAITER})


# =============================================================================
# Order Status Constants
# =============================================================================


class OrderStatus:
    """Order lifecycle status."""

    PENDING: Final[str] = "PENDING"
    CONFIRMED: Final[str] = "CONFIRMED"
    IN_PROGRESS: Final[str] = "IN_PROGRESS"
    COMPLETED: Final[str] = "COMPLETED"
    CANCELED: Final[str] = "CANCELED"

    ALL: Final[list[str]] = [PENDING, CONFIRMED, IN_PROGRESS, COMPLETED, CANCELED]
    # Performer assignments are closed once an order reaches one of these
    CLOSED: Final[list[str]] = [COMPLETED, CANCELED]


class CooksStatus:
    """Kitchen progress on an order."""

    NOT_STARTED: Final[str] = "NOT_STARTED"
    COOKING: Final[str] = "COOKING"
    COOKED: Final[str] = "COOKED"

    ALL: Final[list[str]] = [NOT_STARTED, COOKING, COOKED]


class WaitersStatus:
    """Floor service progress on an order."""

    NOT_STARTED: Final[str] = "NOT_STARTED"
    SERVING: Final[str] = "SERVING"
    SERVED: Final[str] = "SERVED"

    ALL: Final[list[str]] = [NOT_STARTED, SERVING, SERVED]


# =============================================================================
# Error Messages
# =============================================================================


class ErrorMessages:
    """Standard error messages returned by the API."""

    PROPERTIES_NOT_SET: Final[str] = "Properties not set."
    INTERNAL_ERROR: Final[str] = "Internal Server Error. Error: {error}"
    ENTITY_NOT_FOUND: Final[str] = "{entity} {entity_id} not found."
    NO_PLACE: Final[str] = "No free places in restaurant {restaurant} for the requested visit time."
    PAYMENT_ALREADY_USED: Final[str] = "Payment token has already been used."
