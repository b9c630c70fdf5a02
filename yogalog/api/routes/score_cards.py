"""Score Cards — read and rate one card of the caller's session."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from yogalog.api.dependencies import get_current_user_id
from yogalog.core.domain_types import UserId
from yogalog.infrastructure.database import get_db
from yogalog.schemas.score_card import (
    ScoreCardResponse, ScoreCardUpdate, ScoreCardUpdateResponse,
)
from yogalog.services.score_card_updates import get_owned_card, update_score_card

router = APIRouter(prefix="/api/v1/score-cards", tags=["score-cards"])


@router.get("/{card_id}", response_model=ScoreCardResponse)
async def get_score_card(
    card_id: UUID,
    user_id: UserId = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    card = await get_owned_card(db, card_id, user_id)
    return ScoreCardResponse.from_model(card)


@router.patch("/{card_id}", response_model=ScoreCardUpdateResponse)
async def patch_score_card(
    card_id: UUID,
    body: ScoreCardUpdate,
    user_id: UserId = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Partial rating update. Returns the card and the refreshed session score."""
    card, session_score = await update_score_card(db, card_id, user_id, body)
    return ScoreCardUpdateResponse(
        score_card=ScoreCardResponse.from_model(card),
        session_overall_score=session_score,
    )
