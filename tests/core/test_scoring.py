"""Scoring Engine — tests for per-card and per-session overall scores.

Tests cover:
    - card mean over non-null ratings, two-decimal half-up rounding
    - skipped / unrated cards score None
    - session mean ignores skipped and unscored cards
    - merge_ratings partial semantics and skip clearing
"""

from dataclasses import dataclass

import pytest

from yogalog.core.domain_types import RATING_KEYS
from yogalog.core.scoring import (
    compute_card_overall, compute_session_overall, merge_ratings,
    missing_ratings, ratings_of,
)


@dataclass
class _Card:
    skipped: bool = False
    overall_score: float | None = None
    ease: int | None = None
    comfort: int | None = None
    stability: int | None = None
    pain: int | None = None
    breath: int | None = None
    focus: int | None = None


FULL = dict(ease=8, comfort=7, stability=9, pain=6, breath=8, focus=7)
EMPTY = {key: None for key in RATING_KEYS}


# ─── compute_card_overall ────────────────────────────────────────

def test_card_overall_is_mean_of_all_six():
    assert compute_card_overall(FULL, skipped=False) == 7.5


def test_card_overall_ignores_null_ratings():
    ratings = {**EMPTY, "ease": 7, "focus": 8}
    assert compute_card_overall(ratings, skipped=False) == 7.5


def test_card_overall_rounds_half_up_to_two_decimals():
    # 8 + 8 + 7 = 23 / 3 = 7.666...
    ratings = {**EMPTY, "ease": 8, "comfort": 8, "stability": 7}
    assert compute_card_overall(ratings, skipped=False) == 7.67
    # 1 + 2 + 2 + 2 + 2 + 2 = 11 / 6 = 1.8333...
    assert compute_card_overall(
        dict(ease=1, comfort=2, stability=2, pain=2, breath=2, focus=2), False,
    ) == 1.83


def test_card_overall_none_when_unrated():
    assert compute_card_overall(EMPTY, skipped=False) is None


def test_card_overall_none_when_skipped():
    assert compute_card_overall(FULL, skipped=True) is None


# ─── compute_session_overall ─────────────────────────────────────

def test_scenario_rated_unrated_skipped():
    rated = _Card(**FULL)
    rated.overall_score = compute_card_overall(ratings_of(rated), rated.skipped)
    unrated = _Card()
    unrated.overall_score = compute_card_overall(ratings_of(unrated), unrated.skipped)
    skipped = _Card(skipped=True)
    skipped.overall_score = compute_card_overall(ratings_of(skipped), skipped.skipped)

    assert (rated.overall_score, unrated.overall_score, skipped.overall_score) == (
        7.5, None, None,
    )
    assert compute_session_overall([rated, unrated, skipped]) == 7.5


def test_session_overall_ignores_skipped_even_with_stale_score():
    cards = [_Card(overall_score=6.0), _Card(skipped=True, overall_score=10.0)]
    assert compute_session_overall(cards) == 6.0


def test_session_overall_none_without_scored_cards():
    assert compute_session_overall([]) is None
    assert compute_session_overall([_Card(), _Card(skipped=True)]) is None


def test_session_overall_is_order_independent():
    cards = [_Card(overall_score=s) for s in (7.33, 8.17, 6.5, 9.0)]
    assert compute_session_overall(cards) == compute_session_overall(cards[::-1]) == 7.75


def test_recompute_is_idempotent():
    cards = [_Card(overall_score=7.67), _Card(overall_score=8.33)]
    first = compute_session_overall(cards)
    assert compute_session_overall(cards) == first == 8.0


# ─── merge_ratings / missing_ratings ─────────────────────────────

def test_merge_keeps_absent_keys_and_applies_sent_ones():
    merged = merge_ratings(FULL, {"ease": 3, "focus": None}, skipped=False)
    assert merged == {**FULL, "ease": 3, "focus": None}


def test_merge_with_skip_clears_everything():
    merged = merge_ratings(FULL, {"ease": 3}, skipped=True)
    assert merged == EMPTY


@pytest.mark.parametrize("ratings, missing", [
    (FULL, []),
    ({**FULL, "focus": None}, ["focus"]),
    (EMPTY, list(RATING_KEYS)),
])
def test_missing_ratings(ratings, missing):
    assert missing_ratings(ratings) == missing
