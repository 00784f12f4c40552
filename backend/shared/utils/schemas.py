"""
Shared Pydantic schemas used across the application.

Request and response bodies use camelCase field names on the wire.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema serialized with camelCase keys, populated by either name."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Order Schemas
# =============================================================================


class VisitTimeInput(BaseModel):
    """Requested visit range."""

    start: datetime
    end: datetime


class VisitTimeOutput(BaseModel):
    """Visit range as UTC instants, e.g. 2024-01-01T10:00Z."""

    start: str
    end: str


class OrderCreateRequest(CamelModel):
    """
    Body of POST /orders.

    Everything is optional at the schema level; missing properties are
    reported by the repository as 400 "Properties not set.".
    """

    restaurant: int | None = None
    client: int | None = None
    number_of_persons: int | None = None
    visit_time: VisitTimeInput | None = None
    comment: str | None = Field(default=None, max_length=1000)
    menu: list[int] | None = None
    payment_token: str | None = None


class OrderPatchRequest(CamelModel):
    """
    Body of PATCH /orders/{id}.

    Status values are validated by the repository so unknown values map to
    400 IncorrectOrderParameters instead of a schema error.
    """

    order_status: str | None = None
    order_cooks_status: str | None = None
    order_waiters_status: str | None = None
    cooks: list[int] | None = None
    waiters: list[int] | None = None


class FullOrderOutput(CamelModel):
    """Full order info returned by every order endpoint."""

    id: int
    restaurant: int
    client: int
    number_of_persons: int
    visit_time: VisitTimeOutput
    comment: str | None = None
    menu: list[int] | None = None
    status: str
    cooks_status: str
    waiters_status: str
    total_amount: float | None = None
    cooks: list[int] = []
    waiters: list[int] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None


# =============================================================================
# Common Schemas
# =============================================================================


class ErrorResponse(BaseModel):
    """Error body produced by the exception handlers."""

    detail: str
    errors: list[dict[str, Any]] | None = None


class HealthResponse(BaseModel):
    status: str
    service: str
    environment: str
