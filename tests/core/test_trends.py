"""Pose Trends — tests for field selection, day windows and side filters."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import pytest

from yogalog.core.domain_types import TrendMetric, TrendSide
from yogalog.core.errors import ValidationFailedError
from yogalog.core.trends import (
    TrendWindow, parse_days, parse_trend_fields, project_metrics,
    resolve_window, sides_for_filter,
)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


# ─── parse_trend_fields ──────────────────────────────────────────

def test_no_fields_selects_every_metric():
    assert parse_trend_fields(None) == list(TrendMetric)
    assert parse_trend_fields("") == list(TrendMetric)


def test_fields_are_parsed_trimmed_and_deduplicated():
    assert parse_trend_fields(" ease, PAIN ,ease,overall_score") == [
        TrendMetric.EASE, TrendMetric.PAIN, TrendMetric.OVERALL_SCORE,
    ]


def test_unknown_field_rejected():
    with pytest.raises(ValidationFailedError) as exc:
        parse_trend_fields("ease,notes")
    assert exc.value.field == "fields"


# ─── parse_days ──────────────────────────────────────────────────

def test_days_default_when_absent():
    assert parse_days(None, 90) == 90


def test_days_all_means_unbounded():
    assert parse_days("all", 90) is None
    assert parse_days("ALL", 90) is None


def test_days_numeric_string():
    assert parse_days("30", 90) == 30


@pytest.mark.parametrize("raw", ["0", "-5", "week"])
def test_days_invalid_rejected(raw):
    with pytest.raises(ValidationFailedError):
        parse_days(raw, 90)


# ─── resolve_window ──────────────────────────────────────────────

def test_rolling_window_from_days():
    assert resolve_window(7, None, None, NOW) == TrendWindow(NOW - timedelta(days=7), NOW)


def test_unbounded_window():
    assert resolve_window(None, None, None, NOW) == TrendWindow(None, None)


def test_explicit_bounds_override_days():
    start = NOW - timedelta(days=400)
    assert resolve_window(7, start, None, NOW) == TrendWindow(start, None)


def test_from_after_to_rejected():
    with pytest.raises(ValidationFailedError):
        resolve_window(None, NOW, NOW - timedelta(days=1), NOW)


def test_naive_bound_mixed_with_aware_bound():
    naive_end = datetime(2026, 3, 2)
    window = resolve_window(None, NOW, naive_end, NOW)
    assert window == TrendWindow(NOW, naive_end.replace(tzinfo=timezone.utc))


# ─── sides / projection ──────────────────────────────────────────

def test_side_filters():
    assert sides_for_filter(None) is None
    assert sides_for_filter(TrendSide.ALL) is None
    assert sides_for_filter(TrendSide.BOTH) == ["LEFT", "RIGHT"]
    assert sides_for_filter(TrendSide.NA) == ["NA"]


@dataclass
class _Card:
    ease: int = 4
    pain: int = 2
    overall_score: float = 3.0


def test_project_metrics_picks_only_selected():
    assert project_metrics(_Card(), [TrendMetric.PAIN, TrendMetric.OVERALL_SCORE]) == {
        "pain": 2, "overall_score": 3.0,
    }
