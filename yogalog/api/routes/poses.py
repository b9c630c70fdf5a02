"""Poses — catalog reads, pre-composed series and per-user pose trends.

Design Decisions:
    - Trend query params parsed by core/trends.py so the window rules stay pure
    - `days` accepts an integer or "all"; explicit from/to override it
"""

from datetime import datetime, timezone
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from yogalog.api.dependencies import get_current_user_id
from yogalog.config import get_settings
from yogalog.core.domain_types import Segment, TrendSide, UserId
from yogalog.core.pose_catalog import SERIES
from yogalog.core.trends import parse_days, parse_trend_fields, resolve_window
from yogalog.infrastructure.database import get_db
from yogalog.schemas.pose import (
    PoseResponse, PoseTrendResponse, SeriesPose, SeriesResponse,
    TrendPoint, TrendWindowResponse,
)
from yogalog.services.pose_queries import get_pose, list_poses, pose_trend

router = APIRouter(prefix="/api/v1/poses", tags=["poses"])


@router.get("", response_model=list[PoseResponse])
async def get_poses(
    segment: Segment | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    poses = await list_poses(db, segment)
    return [PoseResponse.from_model(p) for p in poses]


@router.get("/series", response_model=list[SeriesResponse])
async def get_series():
    """The four pre-composed series (standing + block + finishing)."""
    return [
        SeriesResponse(
            name=s.name,
            description=s.description,
            poses=[
                SeriesPose(name=p.name, slug=p.slug, is_two_sided=p.is_two_sided)
                for p in s.poses
            ],
        )
        for s in SERIES
    ]


@router.get("/{pose_id}", response_model=PoseResponse)
async def get_pose_by_id(pose_id: UUID, db: AsyncSession = Depends(get_db)):
    return PoseResponse.from_model(await get_pose(db, pose_id))


@router.get("/{pose_id}/trend", response_model=PoseTrendResponse)
async def get_pose_trend(
    pose_id: UUID,
    fields: str | None = Query(None),
    days: str | None = Query(None),
    side: TrendSide | None = Query(None),
    include_skipped: bool = Query(False),
    date_from: datetime | None = Query(None, alias="from"),
    date_to: datetime | None = Query(None, alias="to"),
    user_id: UserId = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Time series of the caller's ratings for one pose."""
    metrics = parse_trend_fields(fields)
    window = resolve_window(
        parse_days(days, get_settings().trend_default_days),
        date_from, date_to, datetime.now(timezone.utc),
    )
    trend = await pose_trend(
        db, pose_id, user_id,
        metrics=metrics, window=window, side=side, include_skipped=include_skipped,
    )
    return PoseTrendResponse(
        pose=PoseResponse.from_model(trend["pose"]),
        metrics=trend["metrics"],
        window=TrendWindowResponse(start=window.start, end=window.end),
        points=[TrendPoint(**p) for p in trend["points"]],
    )
