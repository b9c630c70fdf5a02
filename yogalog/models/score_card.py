"""ScoreCard ORM — one rated pose occurrence within a practice session.

Invariants:
    - (session_id, order_in_session) is unique; positions are contiguous from 1
    - Ratings are NULL or 1–10 (check constraints mirror schemas/score_card.py)
    - skipped = true implies all ratings and overall_score are NULL
    - segment may differ from the pose's own segment (display segment)

Design Decisions:
    - Ratings as six nullable integer columns: cheap filtering/averaging in SQL for trends
    - pose loaded with selectin so serializers never trigger async lazy loads
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    String, Text, Integer, Float, Boolean, DateTime, ForeignKey,
    CheckConstraint, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from yogalog.core.domain_types import RATING_KEYS, Side
from yogalog.db.base import Base


def _rating_check(column: str) -> CheckConstraint:
    return CheckConstraint(
        f"{column} IS NULL OR ({column} BETWEEN 1 AND 10)",
        name=f"ck_score_cards_{column}_range",
    )


class ScoreCard(Base):
    """Score card entity — ratings for one pose on one side in one session."""
    __tablename__ = "score_cards"
    __table_args__ = (
        UniqueConstraint(
            "session_id", "order_in_session",
            name="uq_score_cards_session_order",
        ),
        *(_rating_check(key) for key in RATING_KEYS),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    session_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("practice_sessions.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    pose_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("poses.id"), nullable=False, index=True,
    )
    order_in_session: Mapped[int] = mapped_column(Integer, nullable=False)
    segment: Mapped[str] = mapped_column(String(20), nullable=False)
    side: Mapped[str] = mapped_column(
        String(5), nullable=False, default=Side.NA.value,
    )

    # Ratings (1-10, nullable until rated)
    ease: Mapped[int | None] = mapped_column(Integer, nullable=True)
    comfort: Mapped[int | None] = mapped_column(Integer, nullable=True)
    stability: Mapped[int | None] = mapped_column(Integer, nullable=True)
    pain: Mapped[int | None] = mapped_column(Integer, nullable=True)
    breath: Mapped[int | None] = mapped_column(Integer, nullable=True)
    focus: Mapped[int | None] = mapped_column(Integer, nullable=True)

    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    skipped: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
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
    session: Mapped["PracticeSession"] = relationship(
        "PracticeSession", back_populates="score_cards",
    )
    pose: Mapped["Pose"] = relationship("Pose", lazy="selectin")
