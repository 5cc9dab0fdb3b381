"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_UNIT_KINDS = ("none", "reps", "time", "custom")


def upgrade() -> None:
    # --- ENUM types ---
    habit_unit_enum = sa.Enum(*_UNIT_KINDS, name="habit_unit_enum")
    habit_unit_enum.create(op.get_bind(), checkfirst=True)

    # --- habits ---
    op.create_table(
        "habits",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("owner", sa.String(128), nullable=False),
        sa.Column("name", sa.String(256), nullable=False),
        sa.Column("weekly_target", sa.Integer(), nullable=False),
        sa.Column("unit_kind", sa.Enum(
            *_UNIT_KINDS, name="habit_unit_enum", create_type=False,
        ), nullable=False),
        sa.Column("unit_label", sa.String(64), nullable=True),
        sa.Column("default_amount", sa.BigInteger(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_habits_owner", "habits", ["owner"])

    # --- habit_records ---
    op.create_table(
        "habit_records",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("owner", sa.String(128), nullable=False),
        sa.Column("habit_id", sa.String(32), nullable=False),
        sa.Column("day", sa.Integer(), nullable=False),
        sa.Column("month", sa.Integer(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("amount", sa.BigInteger(), nullable=True),
        sa.Column("unit_kind", sa.Enum(
            *_UNIT_KINDS, name="habit_unit_enum", create_type=False,
        ), nullable=False),
        sa.Column("unit_label", sa.String(64), nullable=True),
        sa.Column("habit_name", sa.String(256), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["habit_id"], ["habits.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("owner", "habit_id", "year", "month", "day", name="uq_habit_record_key"),
    )
    op.create_index("ix_habit_records_id", "habit_records", ["id"])
    op.create_index("ix_habit_records_owner", "habit_records", ["owner"])
    op.create_index("ix_habit_records_habit_id", "habit_records", ["habit_id"])

    # --- monthly_targets ---
    op.create_table(
        "monthly_targets",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("owner", sa.String(128), nullable=False),
        sa.Column("habit_id", sa.String(32), nullable=False),
        sa.Column("month", sa.Integer(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("amount", sa.BigInteger(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["habit_id"], ["habits.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("owner", "habit_id", "year", "month", name="uq_monthly_target_key"),
    )
    op.create_index("ix_monthly_targets_id", "monthly_targets", ["id"])
    op.create_index("ix_monthly_targets_owner", "monthly_targets", ["owner"])
    op.create_index("ix_monthly_targets_habit_id", "monthly_targets", ["habit_id"])

    # --- diary_entries ---
    op.create_table(
        "diary_entries",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("owner", sa.String(128), nullable=False),
        sa.Column("date_key", sa.String(32), nullable=False),
        sa.Column("title", sa.String(256), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("owner", "date_key", name="uq_diary_owner_date"),
    )
    op.create_index("ix_diary_entries_id", "diary_entries", ["id"])
    op.create_index("ix_diary_entries_owner", "diary_entries", ["owner"])

    # --- investment_goals ---
    op.create_table(
        "investment_goals",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("owner", sa.String(128), nullable=False),
        sa.Column("asset", sa.String(128), nullable=False),
        sa.Column("currently_held", sa.BigInteger(), nullable=False),
        sa.Column("target", sa.BigInteger(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_investment_goals_id", "investment_goals", ["id"])
    op.create_index("ix_investment_goals_owner", "investment_goals", ["owner"])

    # --- investment_diary_entries ---
    op.create_table(
        "investment_diary_entries",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("owner", sa.String(128), nullable=False),
        sa.Column("date", sa.BigInteger(), nullable=False),
        sa.Column("asset", sa.String(128), nullable=False),
        sa.Column("amount", sa.BigInteger(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_investment_diary_entries_id", "investment_diary_entries", ["id"])
    op.create_index("ix_investment_diary_entries_owner", "investment_diary_entries", ["owner"])
    op.create_index("ix_investment_diary_entries_date", "investment_diary_entries", ["date"])

    # --- user_profiles ---
    op.create_table(
        "user_profiles",
        sa.Column("owner", sa.String(128), nullable=False),
        sa.Column("name", sa.String(128), nullable=False),
        sa.PrimaryKeyConstraint("owner"),
    )


def downgrade() -> None:
    op.drop_table("user_profiles")
    op.drop_table("investment_diary_entries")
    op.drop_table("investment_goals")
    op.drop_table("diary_entries")
    op.drop_table("monthly_targets")
    op.drop_table("habit_records")
    op.drop_table("habits")
    sa.Enum(name="habit_unit_enum").drop(op.get_bind(), checkfirst=True)
