"""Publish Session — gated DRAFT → PUBLISHED and unconditional PUBLISHED → DRAFT.

Invariants:
    - The read-check-compute-write sequence runs in one transaction on a locked row
    - A rejected publish mutates nothing (check happens before any write)
    - Publishing recomputes every card score and the session score (idempotent)
    - Repeating a transition already in effect is a no-op returning current state
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from yogalog.core.domain_types import SessionId, SessionStatus, UserId
from yogalog.core.enforce_publish import TransitionAction, check_publishable, plan_transition
from yogalog.core.errors import ErrorContext, YogaLogError
from yogalog.core.scoring import compute_card_overall, compute_session_overall, ratings_of
from yogalog.models.practice_session import PracticeSession
from yogalog.services.session_queries import get_owned_session

logger = logging.getLogger(__name__)


def _recompute_scores(session: PracticeSession) -> None:
    for card in session.score_cards:
        card.overall_score = compute_card_overall(ratings_of(card), card.skipped)
    session.overall_score = compute_session_overall(session.score_cards)


async def _transition(
    db: AsyncSession, session_id: SessionId, user_id: UserId, target: SessionStatus,
) -> PracticeSession:
    try:
        session = await get_owned_session(db, session_id, user_id, for_update=True)
        action = plan_transition(session.status, target)

        if action is TransitionAction.PUBLISH:
            check_publishable(session.score_cards)
            _recompute_scores(session)
        if action is not TransitionAction.NOOP:
            session.status = target.value
        await db.commit()
    except YogaLogError as e:
        await db.rollback()
        if e.context.session_id is None:
            e.context = ErrorContext(session_id=str(session_id))
        raise
    except Exception:
        await db.rollback()
        raise

    logger.info(
        f"Session transition {action.value} → {session.status}",
        extra={"session_id": str(session_id), "user_id": user_id},
    )
    return session


async def publish_session(
    db: AsyncSession, session_id: SessionId, user_id: UserId,
) -> PracticeSession:
    """DRAFT → PUBLISHED, only when every non-skipped card is fully rated."""
    return await _transition(db, session_id, user_id, SessionStatus.PUBLISHED)


async def unpublish_session(
    db: AsyncSession, session_id: SessionId, user_id: UserId,
) -> PracticeSession:
    """PUBLISHED → DRAFT, unconditionally."""
    return await _transition(db, session_id, user_id, SessionStatus.DRAFT)
