"""initial_schema

Create the FitJourney schema:
- Habit logs (photo-verified habit completions)
- Water logs (cups of water per entry)

Revision ID: 3c1f0a9d2b47
Revises:
Create Date: 2026-10-18 10:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3c1f0a9d2b47"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # gen_random_uuid() is built in from PostgreSQL 13
    # ========================================================================
    # HABIT_LOGS table
    # ========================================================================
    op.create_table(
        "habit_logs",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("user_email", sa.String(length=255), nullable=False),
        sa.Column("habit_type", sa.String(length=50), nullable=False),
        sa.Column("photo_url", sa.Text(), nullable=False),
        sa.Column("note", sa.String(length=200), server_default="", nullable=False),
        sa.Column("verified", sa.Boolean(), server_default="false", nullable=False),
        sa.Column("verified_by", sa.UUID(), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "habit_type IN ('sleep', 'breakfast', 'lunch', 'exercise', "
            "'no_smoking', 'no_drinking')",
            name="ck_habit_logs_habit_type",
        ),
        sa.CheckConstraint(
            "(verified AND verified_by IS NOT NULL) OR "
            "(NOT verified AND verified_by IS NULL)",
            name="ck_habit_logs_verification",
        ),
    )
    op.execute(
        "CREATE INDEX idx_habit_logs_user_created "
        "ON habit_logs (user_id, created_at DESC)"
    )

    # ========================================================================
    # WATER_LOGS table
    # ========================================================================
    op.create_table(
        "water_logs",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("user_email", sa.String(length=255), nullable=False),
        sa.Column("cups", sa.Integer(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("cups >= 0", name="ck_water_logs_cups"),
    )
    op.create_index(
        "idx_water_logs_user_created",
        "water_logs",
        ["user_id", "created_at"],
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_water_logs_user_created", table_name="water_logs")
    op.drop_table("water_logs")
    op.drop_index("idx_habit_logs_user_created", table_name="habit_logs")
    op.drop_table("habit_logs")
