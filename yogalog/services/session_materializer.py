"""Session Materializer — persists a new DRAFT session and all of its score cards atomically.

Invariants:
    - Session row and every score card commit together or not at all
    - Cards are inserted in one bulk statement, never one-by-one
    - Any plan slug missing from the poses table aborts the whole transaction
      (MissingReferenceDataError, logged at CRITICAL)

Design Decisions:
    - Impureim sandwich: expand (pure) → resolve poses (IO) → layout (pure) → insert (IO)
    - Session reloaded with populate_existing after the bulk insert so the response
      carries ordered cards with their poses without async lazy loads
    - Unique-position clashes propagate as IntegrityError; the session manager
      reports them as ConcurrencyError (409)
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from yogalog.core.domain_types import PracticeType, SessionId, SessionStatus, UserId
from yogalog.core.errors import MissingReferenceDataError
from yogalog.core.plan_expander import (
    CustomSelection, PlanItem, Selection, default_label, expand,
)
from yogalog.core.session_layout import ResolvedPose, layout_score_cards, unique_slugs
from yogalog.models.pose import Pose
from yogalog.models.practice_session import PracticeSession
from yogalog.models.score_card import ScoreCard

logger = logging.getLogger(__name__)


async def resolve_poses(
    db: AsyncSession, plan: list[PlanItem],
) -> dict[str, ResolvedPose]:
    """Map every plan slug that exists in the poses table to its persisted identity."""
    slugs = unique_slugs(plan)
    if not slugs:
        return {}
    result = await db.execute(
        select(Pose.id, Pose.slug, Pose.is_two_sided).where(Pose.slug.in_(slugs)),
    )
    return {
        row.slug: ResolvedPose(id=row.id, slug=row.slug, is_two_sided=row.is_two_sided)
        for row in result
    }


async def materialize_session(
    db: AsyncSession,
    user_id: UserId,
    selection: Selection,
    *,
    date: datetime | None = None,
    label: str | None = None,
    duration_minutes: int | None = None,
) -> PracticeSession:
    """Create a DRAFT session with one score card per plan side. Returns the loaded session."""
    plan = expand(selection)
    practice_type = (
        PracticeType.CUSTOM if isinstance(selection, CustomSelection)
        else selection.practice_type
    )

    try:
        resolved = await resolve_poses(db, plan)

        session = PracticeSession(
            user_id=user_id,
            date=date or datetime.now(timezone.utc),
            label=label or default_label(selection),
            practice_type=practice_type.value,
            duration_minutes=duration_minutes,
            status=SessionStatus.DRAFT.value,
        )
        db.add(session)
        await db.flush()

        try:
            drafts = layout_score_cards(plan, resolved)
        except MissingReferenceDataError as e:
            logger.critical(
                f"Pose catalog not seeded for {len(e.missing_slugs)} slug(s)",
                extra={"missing_slugs": e.missing_slugs, "user_id": user_id},
            )
            raise

        await db.execute(
            insert(ScoreCard),
            [
                {
                    "session_id": session.id,
                    "pose_id": d.pose_id,
                    "order_in_session": d.order_in_session,
                    "segment": d.segment.value,
                    "side": d.side.value,
                    "skipped": False,
                }
                for d in drafts
            ],
        )
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info(
        f"Materialized {practice_type.value} session",
        extra={
            "session_id": str(session.id),
            "user_id": user_id,
            "card_count": len(drafts),
        },
    )
    return await _reload(db, session.id)


async def _reload(db: AsyncSession, session_id: SessionId) -> PracticeSession:
    result = await db.execute(
        select(PracticeSession)
        .where(PracticeSession.id == session_id)
        .execution_options(populate_existing=True),
    )
    return result.scalar_one()
