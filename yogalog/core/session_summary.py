"""Session Summary — pure computation of completeness and metric averages for a session.

Invariants:
    - All inputs come from persisted card fields (no IO, no DB)
    - Skipped cards count as complete and are excluded from averages
    - Pain hot spots: highest pain first, ties broken by session order, at most 5
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from yogalog.core.domain_types import RATING_KEYS
from yogalog.core.enforce_publish import RatedCard
from yogalog.core.scoring import SCORE_PRECISION, missing_ratings, ratings_of

PAIN_HOT_SPOT_LIMIT = 5


def _average(values: list[int]) -> float | None:
    if not values:
        return None
    mean = Decimal(sum(values)) / len(values)
    return float(mean.quantize(SCORE_PRECISION, rounding=ROUND_HALF_UP))


def compute_session_summary(cards: Iterable[RatedCard]) -> dict:
    ordered = sorted(cards, key=lambda c: c.order_in_session)
    active = [c for c in ordered if not c.skipped]

    incomplete = [c for c in active if missing_ratings(ratings_of(c))]
    metric_averages = {
        key: _average([getattr(c, key) for c in active if getattr(c, key) is not None])
        for key in RATING_KEYS
    }

    rated_pain = [c for c in active if c.pain is not None]
    hot_spots = sorted(rated_pain, key=lambda c: (-c.pain, c.order_in_session))
    pain_hot_spots = [
        {
            "score_card_id": str(c.id),
            "pose_name": c.pose.name,
            "side": c.side,
            "pain": c.pain,
            "notes": c.notes,
        }
        for c in hot_spots[:PAIN_HOT_SPOT_LIMIT]
    ]

    return {
        "total": len(ordered),
        "complete": len(ordered) - len(incomplete),
        "incomplete": len(incomplete),
        "skipped": len(ordered) - len(active),
        "first_incomplete_score_card_id": (
            str(incomplete[0].id) if incomplete else None
        ),
        "metric_averages": metric_averages,
        "pain_hot_spots": pain_hot_spots,
    }
