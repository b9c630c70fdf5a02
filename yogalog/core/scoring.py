"""Scoring Engine — per-card and per-session overall scores.

Invariants:
    - All functions are PURE: the result depends only on persisted ratings/flags
    - Card overall = mean of non-null ratings, 2 decimals, None if skipped or unrated
    - Session overall = mean of non-skipped cards' non-null overall scores, 2 decimals
    - Rounding is half-up on the decimal representation, so repeated runs are bit-identical

Design Decisions:
    - Decimal arithmetic instead of float sums: the session mean is order-independent
      and the same inputs always give the same stored float
    - Pain is averaged as stored (no inversion)
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Mapping, Protocol

from yogalog.core.domain_types import RATING_KEYS, OverallScore, Rating

SCORE_PRECISION = Decimal("0.01")


class ScoredCard(Protocol):
    skipped: bool
    overall_score: float | None


def _mean(values: list[Decimal]) -> OverallScore | None:
    if not values:
        return None
    mean = sum(values, Decimal(0)) / len(values)
    return OverallScore(float(mean.quantize(SCORE_PRECISION, rounding=ROUND_HALF_UP)))


def compute_card_overall(
    ratings: Mapping[str, Rating | None], skipped: bool,
) -> OverallScore | None:
    if skipped:
        return None
    present = [
        Decimal(ratings[key]) for key in RATING_KEYS
        if ratings.get(key) is not None
    ]
    return _mean(present)


def compute_session_overall(cards: Iterable[ScoredCard]) -> OverallScore | None:
    scores = [
        Decimal(str(card.overall_score)) for card in cards
        if not card.skipped and card.overall_score is not None
    ]
    return _mean(scores)


def ratings_of(card: object) -> dict[str, int | None]:
    """Read the six rating attributes off any card-like object."""
    return {key: getattr(card, key) for key in RATING_KEYS}


def merge_ratings(
    current: Mapping[str, int | None],
    incoming: Mapping[str, int | None],
    skipped: bool,
) -> dict[str, int | None]:
    """Apply a partial rating update. Skipping clears every rating."""
    if skipped:
        return {key: None for key in RATING_KEYS}
    return {
        key: incoming[key] if key in incoming else current.get(key)
        for key in RATING_KEYS
    }


def missing_ratings(ratings: Mapping[str, int | None]) -> list[str]:
    return [key for key in RATING_KEYS if ratings.get(key) is None]
