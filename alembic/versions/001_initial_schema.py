"""Initial schema — poses, practice_sessions, score_cards.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

RATINGS = ("ease", "comfort", "stability", "pain", "breath", "focus")


def upgrade() -> None:
    op.create_table(
        "poses",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("slug", sa.String(120), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("english_name", sa.String(200), nullable=True),
        sa.Column("segment", sa.String(20), nullable=False),
        sa.Column("order_in_segment", sa.Integer, nullable=False),
        sa.Column("is_two_sided", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_poses_slug", "poses", ["slug"], unique=True)

    op.create_table(
        "practice_sessions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("label", sa.String(200), nullable=True),
        sa.Column("practice_type", sa.String(40), nullable=False),
        sa.Column("duration_minutes", sa.Integer, nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="DRAFT"),
        sa.Column("energy_level", sa.Integer, nullable=True),
        sa.Column("mood", sa.String(50), nullable=True),
        sa.Column("overall_score", sa.Float, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint(
            "energy_level IS NULL OR (energy_level BETWEEN 1 AND 10)",
            name="ck_practice_sessions_energy_level",
        ),
    )
    op.create_index("ix_practice_sessions_user_id", "practice_sessions", ["user_id"])
    op.create_index("ix_practice_sessions_date", "practice_sessions", ["date"])

    op.create_table(
        "score_cards",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "session_id", UUID(as_uuid=True),
            sa.ForeignKey("practice_sessions.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("pose_id", UUID(as_uuid=True), sa.ForeignKey("poses.id"), nullable=False),
        sa.Column("order_in_session", sa.Integer, nullable=False),
        sa.Column("segment", sa.String(20), nullable=False),
        sa.Column("side", sa.String(5), nullable=False, server_default="NA"),
        *(sa.Column(name, sa.Integer, nullable=True) for name in RATINGS),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("skipped", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("overall_score", sa.Float, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("session_id", "order_in_session", name="uq_score_cards_session_order"),
        *(
            sa.CheckConstraint(
                f"{name} IS NULL OR ({name} BETWEEN 1 AND 10)",
                name=f"ck_score_cards_{name}_range",
            )
            for name in RATINGS
        ),
    )
    op.create_index("ix_score_cards_session_id", "score_cards", ["session_id"])
    op.create_index("ix_score_cards_pose_id", "score_cards", ["pose_id"])


def downgrade() -> None:
    op.drop_table("score_cards")
    op.drop_table("practice_sessions")
    op.drop_table("poses")
