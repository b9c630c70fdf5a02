"""Practice Session Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - Preset bodies never carry CUSTOM; custom bodies always carry >= 1 block
    - to_selection() is the only bridge into core/plan_expander.py selections
    - Response models are built from ORM rows via from_model(), never from raw dicts

Design Decisions:
    - Cutoff slugs are free strings here: whether they exist is a catalog question
      answered by the expander (CUTOFF_NOT_FOUND), not a schema question
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from yogalog.core.domain_types import (
    RATING_MAX, RATING_MIN, PracticeType, Segment, SessionStatus,
)
from yogalog.core.plan_expander import CustomBlock, CustomSelection, PresetSelection
from yogalog.schemas.score_card import ScoreCardResponse


class _SessionCreateBase(BaseModel):
    date: datetime | None = None
    label: str | None = Field(None, max_length=200)
    duration_minutes: int | None = Field(None, ge=1, le=24 * 60)

    @field_validator("label")
    @classmethod
    def strip_label(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None


class PresetSessionCreate(_SessionCreateBase):
    """Preset session — one practice type plus optional partial-block cutoffs."""
    practice_type: PracticeType
    half_primary_up_to_slug: str | None = Field(None, max_length=120)
    intermediate_up_to_slug: str | None = Field(None, max_length=120)
    advanced_up_to_slug: str | None = Field(None, max_length=120)

    @field_validator("practice_type")
    @classmethod
    def reject_custom(cls, v: PracticeType) -> PracticeType:
        if v is PracticeType.CUSTOM:
            raise ValueError("use the custom endpoint for CUSTOM practice")
        return v

    def to_selection(self) -> PresetSelection:
        return PresetSelection(
            practice_type=self.practice_type,
            half_primary_up_to_slug=self.half_primary_up_to_slug,
            intermediate_up_to_slug=self.intermediate_up_to_slug,
            advanced_up_to_slug=self.advanced_up_to_slug,
        )


class CustomBlockIn(BaseModel):
    """One series-specific block, optionally truncated at a pose slug."""
    segment: str = Field(min_length=1, max_length=20)
    up_to_slug: str | None = Field(None, max_length=120)
    from_slug: str | None = Field(None, max_length=120)
    display_segment: Segment | None = None


class CustomSessionCreate(_SessionCreateBase):
    """Custom session — explicit ordered body blocks between standing and finishing."""
    blocks: list[CustomBlockIn] = Field(min_length=1, max_length=8)

    def to_selection(self) -> CustomSelection:
        return CustomSelection(blocks=tuple(
            CustomBlock(
                segment=b.segment,
                up_to_slug=b.up_to_slug,
                from_slug=b.from_slug,
                display_segment=b.display_segment,
            )
            for b in self.blocks
        ))


class SessionUpdate(BaseModel):
    """Editable session details. Status and scores are not editable here."""
    date: datetime | None = None
    label: str | None = Field(None, max_length=200)
    duration_minutes: int | None = Field(None, ge=1, le=24 * 60)
    energy_level: int | None = Field(None, ge=RATING_MIN, le=RATING_MAX)
    mood: str | None = Field(None, max_length=50)


class PracticeSessionResponse(BaseModel):
    """Session header — public-facing session data without cards."""
    id: UUID
    date: datetime
    label: str | None
    practice_type: PracticeType
    duration_minutes: int | None
    status: SessionStatus
    energy_level: int | None
    mood: str | None
    overall_score: float | None
    created_at: datetime

    @classmethod
    def from_model(cls, session) -> "PracticeSessionResponse":
        return cls(
            id=session.id,
            date=session.date,
            label=session.label,
            practice_type=session.practice_type,
            duration_minutes=session.duration_minutes,
            status=session.status,
            energy_level=session.energy_level,
            mood=session.mood,
            overall_score=session.overall_score,
            created_at=session.created_at,
        )


class PracticeSessionDetail(PracticeSessionResponse):
    """Session with its score cards in session order."""
    score_cards: list[ScoreCardResponse] = []

    @classmethod
    def from_model(cls, session) -> "PracticeSessionDetail":
        header = PracticeSessionResponse.from_model(session)
        return cls(
            **header.model_dump(),
            score_cards=[
                ScoreCardResponse.from_model(card)
                for card in sorted(session.score_cards, key=lambda c: c.order_in_session)
            ],
        )


class SessionListResponse(BaseModel):
    sessions: list[PracticeSessionResponse]
    pagination: dict
