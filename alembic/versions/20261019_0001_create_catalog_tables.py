"""create catalog tables

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 09:00:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "categories",
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column("color", sa.String(length=16), server_default="#3498db", nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("username", sa.String(length=120), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("role", sa.String(length=16), server_default="viewer", nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
    )

    op.create_table(
        "parts",
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("partname", sa.String(length=255), nullable=False),
        sa.Column("vendor", sa.String(length=255), nullable=False),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("price_usd", sa.Float(), nullable=True),
        sa.Column("price_krw", sa.Float(), nullable=True),
        sa.Column("sap_code", sa.String(length=120), nullable=True),
        sa.Column("category_id", sa.Uuid(as_uuid=True), nullable=True),
        sa.Column("category_name_raw", sa.String(length=120), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_parts_partname_sap_code", "parts", ["partname", "sap_code"], unique=False)
    op.create_index("ix_parts_vendor", "parts", ["vendor"], unique=False)
    op.create_index("ix_parts_created_at", "parts", ["created_at"], unique=False)

    op.create_table(
        "history",
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("part_id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("action", sa.String(length=32), nullable=False),
        sa.Column("price_before", sa.Float(), nullable=True),
        sa.Column("price_after", sa.Float(), nullable=True),
        sa.Column("changed_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["part_id"], ["parts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_history_part_id", "history", ["part_id"], unique=False)
    op.create_index("ix_history_changed_at", "history", ["changed_at"], unique=False)

    op.create_table(
        "notifications",
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("part_id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("message", sa.String(length=500), nullable=False),
        sa.Column("read_status", sa.Boolean(), nullable=False),
        sa.Column("price_before", sa.Float(), nullable=True),
        sa.Column("price_after", sa.Float(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["part_id"], ["parts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_notifications_read_status", "notifications", ["read_status"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_notifications_read_status", table_name="notifications")
    op.drop_table("notifications")
    op.drop_index("ix_history_changed_at", table_name="history")
    op.drop_index("ix_history_part_id", table_name="history")
    op.drop_table("history")
    op.drop_index("ix_parts_created_at", table_name="parts")
    op.drop_index("ix_parts_vendor", table_name="parts")
    op.drop_index("ix_parts_partname_sap_code", table_name="parts")
    op.drop_table("parts")
    op.drop_table("users")
    op.drop_table("categories")
