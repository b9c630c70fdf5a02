"""Score Card Schemas — partial rating updates and card responses.

Invariants:
    - Each rating is an integer 1–10 or explicit null
    - An update must set at least one field
    - Absent fields are left untouched; explicit null clears a rating

Design Decisions:
    - model_fields_set distinguishes "absent" from "null" without sentinel values
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from yogalog.core.domain_types import RATING_KEYS, RATING_MAX, RATING_MIN, Segment, Side


class ScoreCardUpdate(BaseModel):
    """Partial update of one score card."""
    ease: int | None = Field(None, ge=RATING_MIN, le=RATING_MAX)
    comfort: int | None = Field(None, ge=RATING_MIN, le=RATING_MAX)
    stability: int | None = Field(None, ge=RATING_MIN, le=RATING_MAX)
    pain: int | None = Field(None, ge=RATING_MIN, le=RATING_MAX)
    breath: int | None = Field(None, ge=RATING_MIN, le=RATING_MAX)
    focus: int | None = Field(None, ge=RATING_MIN, le=RATING_MAX)
    notes: str | None = Field(None, max_length=2000)
    skipped: bool | None = None
    side: Side | None = None

    @model_validator(mode="after")
    def require_some_field(self):
        if not self.model_fields_set:
            raise ValueError("No fields to update")
        if "skipped" in self.model_fields_set and self.skipped is None:
            raise ValueError("skipped cannot be null")
        if "side" in self.model_fields_set and self.side is None:
            raise ValueError("side cannot be null")
        return self

    def rating_changes(self) -> dict[str, int | None]:
        """Only the ratings the caller actually sent."""
        return {
            key: getattr(self, key) for key in RATING_KEYS
            if key in self.model_fields_set
        }


class ScoreCardResponse(BaseModel):
    id: UUID
    session_id: UUID
    pose_id: UUID
    pose_slug: str
    pose_name: str
    order_in_session: int
    segment: Segment
    side: Side
    ease: int | None
    comfort: int | None
    stability: int | None
    pain: int | None
    breath: int | None
    focus: int | None
    notes: str | None
    skipped: bool
    overall_score: float | None
    updated_at: datetime | None = None

    @classmethod
    def from_model(cls, card) -> "ScoreCardResponse":
        return cls(
            id=card.id,
            session_id=card.session_id,
            pose_id=card.pose_id,
            pose_slug=card.pose.slug,
            pose_name=card.pose.name,
            order_in_session=card.order_in_session,
            segment=card.segment,
            side=card.side,
            **{key: getattr(card, key) for key in RATING_KEYS},
            notes=card.notes,
            skipped=card.skipped,
            overall_score=card.overall_score,
            updated_at=card.updated_at,
        )


class ScoreCardUpdateResponse(BaseModel):
    """Updated card plus the refreshed session aggregate."""
    score_card: ScoreCardResponse
    session_overall_score: float | None
