"""Publish Enforcement — status transitions and the completeness gate.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - DRAFT -> PUBLISHED requires every non-skipped card to have all six ratings
    - PUBLISHED -> DRAFT is unconditional
    - Repeating a transition on a session already in the target state is a no-op
    - ARCHIVED has no outgoing transitions here

Design Decisions:
    - plan_transition returns an action instead of mutating: the service decides
      what to recompute, the core decides what is allowed
    - Incomplete cards reported as plain dicts so the error envelope can carry them as-is
"""

from enum import Enum
from typing import Iterable, Protocol
from uuid import UUID

from yogalog.core.domain_types import SessionStatus
from yogalog.core.errors import IncompleteSessionError, InvalidTransitionError
from yogalog.core.scoring import missing_ratings, ratings_of


class TransitionAction(str, Enum):
    NOOP = "noop"
    PUBLISH = "publish"
    UNPUBLISH = "unpublish"


class PoseLike(Protocol):
    slug: str
    name: str


class RatedCard(Protocol):
    id: UUID
    order_in_session: int
    side: str
    skipped: bool
    pose: PoseLike


def plan_transition(current: str, target: SessionStatus) -> TransitionAction:
    """Decide what a status change request means from the current status."""
    current_status = SessionStatus(current)
    if current_status is SessionStatus.ARCHIVED:
        raise InvalidTransitionError(current_status.value, target.value)
    if current_status is target:
        return TransitionAction.NOOP
    if target is SessionStatus.PUBLISHED:
        return TransitionAction.PUBLISH
    if target is SessionStatus.DRAFT:
        return TransitionAction.UNPUBLISH
    raise InvalidTransitionError(current_status.value, target.value)


def find_incomplete_cards(cards: Iterable[RatedCard]) -> list[dict]:
    """Non-skipped cards with at least one null rating, in session order."""
    incomplete = []
    for card in sorted(cards, key=lambda c: c.order_in_session):
        if card.skipped:
            continue
        missing = missing_ratings(ratings_of(card))
        if missing:
            incomplete.append({
                "score_card_id": str(card.id),
                "order_in_session": card.order_in_session,
                "pose_slug": card.pose.slug,
                "pose_name": card.pose.name,
                "side": card.side,
                "missing": missing,
            })
    return incomplete


def check_publishable(cards: Iterable[RatedCard]) -> None:
    """Raise IncompleteSessionError naming every card with missing ratings."""
    incomplete = find_incomplete_cards(cards)
    if incomplete:
        raise IncompleteSessionError(incomplete)
