"""Pose ORM — immutable reference data seeded from the pose catalog.

Invariants:
    - slug is unique and derived from name (core/slugs.py)
    - Rows are only written by the idempotent catalog upsert (db/seed.py)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Integer, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from yogalog.db.base import Base


class Pose(Base):
    """A named posture in the catalog."""
    __tablename__ = "poses"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    slug: Mapped[str] = mapped_column(
        String(120), nullable=False, unique=True, index=True,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    english_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    segment: Mapped[str] = mapped_column(String(20), nullable=False)
    order_in_segment: Mapped[int] = mapped_column(Integer, nullable=False)
    is_two_sided: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
