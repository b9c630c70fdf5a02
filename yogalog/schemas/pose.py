"""Pose Schemas — catalog reads and trend responses."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from yogalog.core.domain_types import Segment, Side, TrendMetric


class PoseResponse(BaseModel):
    id: UUID
    slug: str
    name: str
    english_name: str | None
    segment: Segment
    order_in_segment: int
    is_two_sided: bool

    @classmethod
    def from_model(cls, pose) -> "PoseResponse":
        return cls(
            id=pose.id,
            slug=pose.slug,
            name=pose.name,
            english_name=pose.english_name,
            segment=pose.segment,
            order_in_segment=pose.order_in_segment,
            is_two_sided=pose.is_two_sided,
        )


class SeriesPose(BaseModel):
    name: str
    slug: str
    is_two_sided: bool


class SeriesResponse(BaseModel):
    name: str
    description: str
    poses: list[SeriesPose]


class TrendPoint(BaseModel):
    score_card_id: UUID
    session_id: UUID
    session_date: datetime
    side: Side
    segment: Segment
    order_in_session: int
    skipped: bool
    values: dict[str, float | int | None]


class TrendWindowResponse(BaseModel):
    start: datetime | None
    end: datetime | None


class PoseTrendResponse(BaseModel):
    pose: PoseResponse
    metrics: list[TrendMetric]
    window: TrendWindowResponse
    points: list[TrendPoint]
