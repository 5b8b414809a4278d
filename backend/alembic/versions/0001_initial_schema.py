"""Initial reservation book schema.

Revision ID: 0001
Revises:
Create Date: 2026-10-17
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "members",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(length=320), nullable=False, unique=True),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column(
            "role",
            sa.Enum("ADMIN", "USER", name="memberrole"),
            nullable=False,
        ),
        *_timestamps(),
    )

    op.create_table(
        "themes",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=255), nullable=False, unique=True),
        sa.Column("description", sa.String(length=1024), nullable=False),
        sa.Column("thumbnail", sa.String(length=1024), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("length(trim(name)) > 0", name="ck_themes_name_not_blank"),
    )

    op.create_table(
        "reservation_times",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("start_at", sa.Time(), nullable=False, unique=True),
        *_timestamps(),
    )

    op.create_table(
        "reservations",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "member_id",
            sa.Integer(),
            sa.ForeignKey("members.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column(
            "time_slot_id",
            sa.Integer(),
            sa.ForeignKey("reservation_times.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column(
            "theme_id",
            sa.Integer(),
            sa.ForeignKey("themes.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column(
            "status",
            sa.Enum("RESERVED", "WAITING", name="reservationstatus"),
            nullable=False,
        ),
        *_timestamps(),
        sa.UniqueConstraint(
            "date",
            "time_slot_id",
            "theme_id",
            "member_id",
            name="uq_reservations_slot_member",
        ),
    )
    op.create_index(
        "ix_reservations_slot",
        "reservations",
        ["date", "time_slot_id", "theme_id"],
    )
    op.create_index("ix_reservations_member", "reservations", ["member_id"])
    op.create_index(
        "ux_reservations_slot_reserved",
        "reservations",
        ["date", "time_slot_id", "theme_id"],
        unique=True,
        postgresql_where=sa.text("status = 'RESERVED'"),
        sqlite_where=sa.text("status = 'RESERVED'"),
    )


def downgrade() -> None:
    op.drop_index("ux_reservations_slot_reserved", table_name="reservations")
    op.drop_index("ix_reservations_member", table_name="reservations")
    op.drop_index("ix_reservations_slot", table_name="reservations")
    op.drop_table("reservations")
    op.drop_table("reservation_times")
    op.drop_table("themes")
    op.drop_table("members")
    sa.Enum(name="reservationstatus").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="memberrole").drop(op.get_bind(), checkfirst=True)
