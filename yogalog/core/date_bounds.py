"""Date Bounds — `from`/`to` query bounds normalized to aware UTC.

Invariants:
    - Naive datetimes are read as UTC; aware ones are converted to UTC
    - A lower bound after the upper bound is a validation error, never a TypeError
"""

from datetime import datetime, timezone

from yogalog.core.errors import ValidationFailedError


def as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def normalize_bounds(
    start: datetime | None, end: datetime | None,
) -> tuple[datetime | None, datetime | None]:
    start, end = as_utc(start), as_utc(end)
    if start and end and start > end:
        raise ValidationFailedError("`from` must be <= `to`", field="from")
    return start, end
