"""PracticeSession ORM — one practice occurrence for one user.

Invariants:
    - Created in DRAFT together with all its score cards (services/session_materializer.py)
    - status and overall_score change only through publish/unpublish and card updates
    - overall_score is the mean of non-skipped cards' overall scores, or NULL

Design Decisions:
    - user_id is the caller-supplied identity string; no users table (auth lives upstream)
    - score_cards ordered by order_in_session and loaded with selectin (async-safe)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Integer, Float, DateTime, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from yogalog.core.domain_types import SessionStatus
from yogalog.db.base import Base


class PracticeSession(Base):
    """Practice session aggregate root — owns its score cards."""
    __tablename__ = "practice_sessions"
    __table_args__ = (
        CheckConstraint(
            "energy_level IS NULL OR (energy_level BETWEEN 1 AND 10)",
            name="ck_practice_sessions_energy_level",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True,
    )
    label: Mapped[str | None] = mapped_column(String(200), nullable=True)
    practice_type: Mapped[str] = mapped_column(String(40), nullable=False)
    duration_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=SessionStatus.DRAFT.value,
    )
    energy_level: Mapped[int | None] = mapped_column(Integer, nullable=True)
    mood: Mapped[str | None] = mapped_column(String(50), nullable=True)
    overall_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    score_cards: Mapped[list["ScoreCard"]] = relationship(
        "ScoreCard", back_populates="session",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="ScoreCard.order_in_session",
    )
