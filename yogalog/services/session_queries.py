"""Session Queries — ownership-scoped reads and detail edits for practice sessions.

Invariants:
    - Every lookup filters by user_id; another user's session is indistinguishable
      from a missing one (ResourceNotFoundError)
    - List order is date desc, id desc (stable under equal dates)
"""

import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from yogalog.core.date_bounds import normalize_bounds
from yogalog.core.domain_types import SessionId, SessionStatus, UserId
from yogalog.core.errors import ErrorContext, ResourceNotFoundError, ValidationFailedError
from yogalog.core.session_summary import compute_session_summary
from yogalog.models.practice_session import PracticeSession
from yogalog.schemas.practice_session import SessionUpdate

logger = logging.getLogger(__name__)


async def get_owned_session(
    db: AsyncSession,
    session_id: SessionId,
    user_id: UserId,
    *,
    for_update: bool = False,
) -> PracticeSession:
    """Get the caller's session or raise 404. Optionally row-locks it."""
    query = (
        select(PracticeSession)
        .where(PracticeSession.id == session_id, PracticeSession.user_id == user_id)
        .execution_options(populate_existing=True)
    )
    if for_update:
        query = query.with_for_update()
    result = await db.execute(query)
    session = result.scalar_one_or_none()
    if session is None:
        raise ResourceNotFoundError(
            "PracticeSession", str(session_id),
            ErrorContext(session_id=str(session_id)),
        )
    return session


async def list_sessions(
    db: AsyncSession,
    user_id: UserId,
    *,
    limit: int,
    offset: int = 0,
    status: SessionStatus | None = None,
    date_from: datetime | None = None,
    date_to: datetime | None = None,
) -> list[PracticeSession]:
    date_from, date_to = normalize_bounds(date_from, date_to)

    query = select(PracticeSession).where(PracticeSession.user_id == user_id)
    if status:
        query = query.where(PracticeSession.status == status.value)
    if date_from:
        query = query.where(PracticeSession.date >= date_from)
    if date_to:
        query = query.where(PracticeSession.date <= date_to)
    query = query.order_by(
        PracticeSession.date.desc(), PracticeSession.id.desc(),
    ).limit(limit).offset(offset)

    result = await db.execute(query)
    return list(result.scalars().all())


async def summarize_session(
    db: AsyncSession, session_id: SessionId, user_id: UserId,
) -> dict:
    session = await get_owned_session(db, session_id, user_id)
    summary = compute_session_summary(session.score_cards)
    return {
        "session_id": str(session.id),
        "status": session.status,
        "overall_score": session.overall_score,
        **summary,
    }


async def update_session_details(
    db: AsyncSession, session_id: SessionId, user_id: UserId, body: SessionUpdate,
) -> PracticeSession:
    """Apply the fields the caller sent. Status and scores are untouched."""
    changes = body.model_dump(exclude_unset=True)
    if not changes:
        raise ValidationFailedError("No fields to update")
    if "date" in changes and changes["date"] is None:
        raise ValidationFailedError("date cannot be null", field="date")

    try:
        session = await get_owned_session(db, session_id, user_id, for_update=True)
        for name, value in changes.items():
            setattr(session, name, value)
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info(
        f"Session details updated: {', '.join(sorted(changes))}",
        extra={"session_id": str(session_id), "user_id": user_id},
    )
    return await get_owned_session(db, session_id, user_id)
