"""
Utilities module: Exceptions, schemas, visit time codec.
"""

from shared.utils.exceptions import (
    AlreadyExistsError,
    IncorrectOrderParametersError,
    InvalidArgumentError,
    MalformedVisitTimeError,
    NoPlaceError,
    NotFoundError,
)
from shared.utils.schemas import ErrorResponse

__all__ = [
    # exceptions
    "AlreadyExistsError",
    "IncorrectOrderParametersError",
    "InvalidArgumentError",
    "MalformedVisitTimeError",
    "NoPlaceError",
    "NotFoundError",
    # schemas
    "ErrorResponse",
]
