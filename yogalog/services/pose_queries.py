"""Pose Queries — catalog reads and per-user pose trends.

Invariants:
    - Catalog reads are user-independent; trends only ever see the caller's cards
    - Trend points are ordered by session date, then order_in_session
    - Skipped cards are excluded unless include_skipped is set
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from yogalog.core.domain_types import PoseId, Segment, TrendMetric, TrendSide, UserId
from yogalog.core.errors import ResourceNotFoundError
from yogalog.core.trends import TrendWindow, project_metrics, sides_for_filter
from yogalog.models.pose import Pose
from yogalog.models.practice_session import PracticeSession
from yogalog.models.score_card import ScoreCard


async def list_poses(
    db: AsyncSession, segment: Segment | None = None,
) -> list[Pose]:
    query = select(Pose)
    if segment:
        query = query.where(Pose.segment == segment.value)
    query = query.order_by(Pose.segment, Pose.order_in_segment, Pose.name)
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_pose(db: AsyncSession, pose_id: PoseId) -> Pose:
    pose = await db.get(Pose, pose_id)
    if pose is None:
        raise ResourceNotFoundError("Pose", str(pose_id))
    return pose


async def pose_trend(
    db: AsyncSession,
    pose_id: PoseId,
    user_id: UserId,
    *,
    metrics: list[TrendMetric],
    window: TrendWindow,
    side: TrendSide | None = None,
    include_skipped: bool = False,
) -> dict:
    """Time-ordered metric points for one pose across the caller's sessions."""
    pose = await get_pose(db, pose_id)

    query = (
        select(ScoreCard, PracticeSession.date)
        .join(PracticeSession, PracticeSession.id == ScoreCard.session_id)
        .where(ScoreCard.pose_id == pose_id, PracticeSession.user_id == user_id)
    )
    sides = sides_for_filter(side)
    if sides is not None:
        query = query.where(ScoreCard.side.in_(sides))
    if not include_skipped:
        query = query.where(ScoreCard.skipped.is_(False))
    if window.start:
        query = query.where(PracticeSession.date >= window.start)
    if window.end:
        query = query.where(PracticeSession.date <= window.end)
    query = query.order_by(
        PracticeSession.date.asc(), ScoreCard.order_in_session.asc(),
    )

    result = await db.execute(query)
    points = [
        {
            "score_card_id": card.id,
            "session_id": card.session_id,
            "session_date": session_date,
            "side": card.side,
            "segment": card.segment,
            "order_in_session": card.order_in_session,
            "skipped": card.skipped,
            "values": project_metrics(card, metrics),
        }
        for card, session_date in result.all()
    ]
    return {"pose": pose, "metrics": metrics, "window": window, "points": points}