"""Score Card Updates — partial rating edits with same-transaction aggregate refresh.

Invariants:
    - Card overall score is recomputed from the merged ratings on every update
    - Session overall score is recomputed from persisted cards before the single commit
    - skipped = true clears all six ratings and the card overall score
    - Card sides never change: each two-sided occurrence keeps exactly one RIGHT
      card followed by one LEFT card, a one-sided pose stays NA

Design Decisions:
    - Session row locked (FOR UPDATE) before the card: concurrent updates on sibling
      cards serialize on the aggregate, so the last commit wins with a fresh mean
    - Ratings allowed on published sessions; status is never changed here
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from yogalog.core.domain_types import ScoreCardId, Side, UserId
from yogalog.core.errors import ErrorContext, ResourceNotFoundError, ValidationFailedError
from yogalog.core.scoring import (
    compute_card_overall, compute_session_overall, merge_ratings, ratings_of,
)
from yogalog.models.practice_session import PracticeSession
from yogalog.models.score_card import ScoreCard
from yogalog.schemas.score_card import ScoreCardUpdate

logger = logging.getLogger(__name__)


async def get_owned_card(
    db: AsyncSession, card_id: ScoreCardId, user_id: UserId,
) -> ScoreCard:
    """Get the caller's score card or raise 404."""
    result = await db.execute(
        select(ScoreCard)
        .join(PracticeSession, PracticeSession.id == ScoreCard.session_id)
        .where(ScoreCard.id == card_id, PracticeSession.user_id == user_id)
        .execution_options(populate_existing=True),
    )
    card = result.scalar_one_or_none()
    if card is None:
        raise ResourceNotFoundError(
            "ScoreCard", str(card_id), ErrorContext(score_card_id=str(card_id)),
        )
    return card


def _check_side(card: ScoreCard, side: Side) -> None:
    """Sides are fixed at materialization: one RIGHT then one LEFT card per two-sided
    occurrence, NA otherwise. A side edit may only restate the current side."""
    if side.value != card.side:
        raise ValidationFailedError(
            f"Card side is fixed at {card.side}, cannot change it to {side.value}",
            field="side",
            context=ErrorContext(score_card_id=str(card.id)),
        )


async def update_score_card(
    db: AsyncSession, card_id: ScoreCardId, user_id: UserId, body: ScoreCardUpdate,
) -> tuple[ScoreCard, float | None]:
    """Apply a partial update. Returns (card, refreshed session overall score)."""
    try:
        owner = await get_owned_card(db, card_id, user_id)
        session = (await db.execute(
            select(PracticeSession)
            .where(PracticeSession.id == owner.session_id)
            .with_for_update()
            .execution_options(populate_existing=True),
        )).scalar_one()
        card = next(c for c in session.score_cards if c.id == card_id)

        fields = body.model_fields_set
        skipped = body.skipped if "skipped" in fields else card.skipped
        merged = merge_ratings(ratings_of(card), body.rating_changes(), skipped)

        if "side" in fields:
            _check_side(card, body.side)
        if "notes" in fields:
            card.notes = body.notes
        card.skipped = skipped
        for key, value in merged.items():
            setattr(card, key, value)
        card.overall_score = compute_card_overall(merged, skipped)

        session.overall_score = compute_session_overall(session.score_cards)
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info(
        "Score card updated",
        extra={
            "score_card_id": str(card_id),
            "session_id": str(session.id),
            "user_id": user_id,
        },
    )
    return card, session.overall_score
