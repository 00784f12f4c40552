"""
Visit time range codec.

Orders store their visit time as one range literal, the way a PostgreSQL
range prints:

    (2024-01-01 10:00,2024-01-01 12:00)
    ["2024-01-01 10:00:00","2024-01-01 12:00:00")

The API exposes it as two UTC instants:

    {"start": "2024-01-01T10:00Z", "end": "2024-01-01T12:00Z"}

Anything that does not have exactly one comma between two parseable bounds
inside round/square brackets raises MalformedVisitTimeError.
"""

import re
from datetime import datetime, timezone

from shared.utils.exceptions import MalformedVisitTimeError

# Optional matching double quotes around each bound
_RANGE_LITERAL = re.compile(
    r'^\s*[\[(]\s*("?)([^",()\[\]]+)\1\s*,\s*("?)([^",()\[\]]+)\3\s*[\])]\s*$'
)


def _to_utc_naive(value: datetime) -> datetime:
    """Aware datetimes are converted to UTC; naive ones are taken as UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _format_instant(value: datetime, separator: str) -> str:
    text = value.strftime(f"%Y-%m-%d{separator}%H:%M")
    if value.microsecond:
        text += value.strftime(":%S.%f")
    elif value.second:
        text += value.strftime(":%S")
    return text


def _parse_bound(raw: str, bound: str) -> datetime:
    try:
        return _to_utc_naive(datetime.fromisoformat(bound.strip()))
    except ValueError as exc:
        raise MalformedVisitTimeError(raw, f"invalid bound {bound!r}") from exc


def format_visit_time(start: datetime, end: datetime) -> str:
    """Encode a visit range for storage."""
    start, end = _to_utc_naive(start), _to_utc_naive(end)
    return f"({_format_instant(start, ' ')},{_format_instant(end, ' ')})"


def parse_visit_time(raw: str) -> tuple[datetime, datetime]:
    """
    Decode a stored visit range into naive UTC datetimes.

    Raises:
        MalformedVisitTimeError: If raw is not a two-bound range literal
    """
    if not isinstance(raw, str):
        raise MalformedVisitTimeError(raw, "not a string")

    match = _RANGE_LITERAL.match(raw)
    if match is None:
        raise MalformedVisitTimeError(raw, "expected '(start,end)'")

    return _parse_bound(raw, match.group(2)), _parse_bound(raw, match.group(4))


def to_api_visit_time(raw: str) -> dict[str, str]:
    """Stored range literal -> {"start": "...Z", "end": "...Z"}."""
    start, end = parse_visit_time(raw)
    return {
        "start": _format_instant(start, "T") + "Z",
        "end": _format_instant(end, "T") + "Z",
    }


def ranges_overlap(
    first: tuple[datetime, datetime], second: tuple[datetime, datetime]
) -> bool:
    """Half-open [start, end) overlap test."""
    return first[0] < second[1] and second[0] < first[1]
