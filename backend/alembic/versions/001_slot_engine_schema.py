# backend/alembic/versions/001_slot_engine_schema.py
"""Booking slot engine schema

Revision ID: 001_slot_engine_schema
Revises:
Create Date: 2026-03-01 00:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001_slot_engine_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create business, schedule, block, order and lock tables."""
    print("Creating booking slot engine tables...")

    op.create_table(
        "businesses",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column(
            "same_day_pickup_allowed", sa.Boolean(), nullable=True, server_default=sa.text("true")
        ),
        sa.Column("cutoff_time", sa.Time(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
    )

    print("Creating business_availability_schedules table...")
    op.create_table(
        "business_availability_schedules",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("business_id", sa.String(26), nullable=False),
        sa.Column("day_of_week", sa.Integer(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=True),
        sa.Column("end_time", sa.Time(), nullable=True),
        sa.Column("is_available", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["business_id"], ["businesses.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("business_id", "day_of_week", name="uq_schedule_business_day"),
        sa.CheckConstraint(
            "day_of_week >= 0 AND day_of_week <= 6", name="ck_schedule_day_of_week"
        ),
    )
    op.create_index(
        "idx_business_availability_schedules_business_id",
        "business_availability_schedules",
        ["business_id"],
    )

    print("Creating business_availability_blocks table...")
    op.create_table(
        "business_availability_blocks",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("business_id", sa.String(26), nullable=False),
        sa.Column("block_date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=True),
        sa.Column("end_time", sa.Time(), nullable=True),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.Column("is_all_day", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["business_id"], ["businesses.id"], ondelete="CASCADE"),
    )
    op.create_index(
        "idx_business_availability_blocks_business_date",
        "business_availability_blocks",
        ["business_id", "block_date"],
    )

    print("Creating orders table...")
    op.create_table(
        "orders",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("business_id", sa.String(26), nullable=False),
        sa.Column("booking_date", sa.Date(), nullable=True),
        sa.Column("booking_time", sa.Time(), nullable=True),
        sa.Column("booking_duration_minutes", sa.Integer(), nullable=True),
        sa.Column("booking_status", sa.String(20), nullable=False, server_default="confirmed"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["business_id"], ["businesses.id"], ondelete="CASCADE"),
        sa.CheckConstraint(
            "booking_status IN ('confirmed', 'cancelled', 'completed')",
            name="ck_orders_booking_status",
        ),
    )
    op.create_index(
        "idx_orders_booking_date_time", "orders", ["business_id", "booking_date", "booking_time"]
    )

    print("Creating booking_locks table...")
    op.create_table(
        "booking_locks",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("business_id", sa.String(26), nullable=False),
        sa.Column("booking_date", sa.Date(), nullable=False),
        sa.Column("booking_time", sa.Time(), nullable=False),
        sa.Column("locked_by", sa.String(64), nullable=False),
        sa.Column("expires_at", sa.DateTime(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["business_id"], ["businesses.id"], ondelete="CASCADE"),
        sa.UniqueConstraint(
            "business_id", "booking_date", "booking_time", name="uq_booking_locks_slot"
        ),
    )
    op.create_index("ix_booking_locks_expires_at", "booking_locks", ["expires_at"])

    print("Booking slot engine tables created")


def downgrade() -> None:
    """Drop booking slot engine tables."""
    print("Dropping booking slot engine tables...")

    op.drop_index("ix_booking_locks_expires_at", table_name="booking_locks")
    op.drop_table("booking_locks")
    op.drop_index("idx_orders_booking_date_time", table_name="orders")
    op.drop_table("orders")
    op.drop_index(
        "idx_business_availability_blocks_business_date",
        table_name="business_availability_blocks",
    )
    op.drop_table("business_availability_blocks")
    op.drop_index(
        "idx_business_availability_schedules_business_id",
        table_name="business_availability_schedules",
    )
    op.drop_table("business_availability_schedules")
    op.drop_table("businesses")
