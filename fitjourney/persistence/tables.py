"""SQLAlchemy table definitions for FitJourney.

These table definitions match the schema created by the Alembic migrations.
Column types are the generic SQLAlchemy ones so the same tables work on
PostgreSQL and on the SQLite database used in tests.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Uuid,
)

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# HABIT LOGS TABLE
# ============================================================================
habit_logs_table = Table(
    "habit_logs",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("user_id", Uuid, nullable=False),
    Column("user_email", String(255), nullable=False),  # Denormalised for display
    Column("habit_type", String(50), nullable=False),
    Column("photo_url", String, nullable=False),
    Column("note", String(200), nullable=False, server_default=""),
    Column("verified", Boolean, nullable=False, server_default="false"),
    Column("verified_by", Uuid, nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
    CheckConstraint(
        "(verified AND verified_by IS NOT NULL) OR "
        "(NOT verified AND verified_by IS NULL)",
        name="ck_habit_logs_verification",
    ),
)

Index(
    "idx_habit_logs_user_created",
    habit_logs_table.c.user_id,
    habit_logs_table.c.created_at.desc(),
)

# ============================================================================
# WATER LOGS TABLE
# ============================================================================
water_logs_table = Table(
    "water_logs",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("user_id", Uuid, nullable=False),
    Column("user_email", String(255), nullable=False),
    Column("cups", Integer, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
    CheckConstraint("cups >= 0", name="ck_water_logs_cups"),
)

Index(
    "idx_water_logs_user_created",
    water_logs_table.c.user_id,
    water_logs_table.c.created_at,
)
