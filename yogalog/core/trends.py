"""Pose Trends — pure helpers for selecting metrics and windows when trending a pose.

Invariants:
    - Selectable fields are the fixed TrendMetric set (six ratings + overall score)
    - Explicit from/to override the rolling `days` window
    - Explicit bounds are returned as aware UTC datetimes
    - days == "all" with no explicit bounds means an unbounded window
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from yogalog.core.date_bounds import normalize_bounds
from yogalog.core.domain_types import Side, TrendMetric, TrendSide
from yogalog.core.errors import ValidationFailedError


@dataclass(frozen=True)
class TrendWindow:
    start: datetime | None
    end: datetime | None


def parse_trend_fields(raw: str | None) -> list[TrendMetric]:
    """Parse a comma-separated field list. None/empty selects every metric."""
    if not raw:
        return list(TrendMetric)
    names = [part.strip().lower() for part in raw.split(",") if part.strip()]
    allowed = {m.value: m for m in TrendMetric}
    unknown = [n for n in names if n not in allowed]
    if unknown:
        raise ValidationFailedError(
            f"fields must be a comma-separated list of: {', '.join(allowed)}",
            field="fields",
        )
    return list(dict.fromkeys(allowed[n] for n in names))


def parse_days(raw: str | int | None, default: int) -> int | None:
    """Return a positive day count, or None for 'all'."""
    if raw is None:
        return default
    if isinstance(raw, str) and raw.strip().lower() == "all":
        return None
    try:
        days = int(raw)
    except (TypeError, ValueError):
        raise ValidationFailedError("days must be a positive integer or 'all'", field="days") from None
    if days <= 0:
        raise ValidationFailedError("days must be a positive integer or 'all'", field="days")
    return days


def resolve_window(
    days: int | None,
    start: datetime | None,
    end: datetime | None,
    now: datetime,
) -> TrendWindow:
    start, end = normalize_bounds(start, end)
    if start or end:
        return TrendWindow(start=start, end=end)
    if days is None:
        return TrendWindow(start=None, end=None)
    return TrendWindow(start=now - timedelta(days=days), end=now)


def sides_for_filter(side: TrendSide | None) -> list[str] | None:
    """Side values to match, or None for no side filter."""
    if side is None or side is TrendSide.ALL:
        return None
    if side is TrendSide.BOTH:
        return [Side.LEFT.value, Side.RIGHT.value]
    return [side.value]


def project_metrics(card: object, metrics: list[TrendMetric]) -> dict[str, float | int | None]:
    """Pick only the requested metric values off a card."""
    return {m.value: getattr(card, m.value) for m in metrics}
