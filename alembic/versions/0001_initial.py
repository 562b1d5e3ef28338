"""Create users, transactions and hint history tables.

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-18 00:00:00
"""

from alembic import op
import sqlalchemy as sa


revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "bot_users",
        sa.Column("tg_chat_id", sa.BigInteger(), autoincrement=False, nullable=False),
        sa.Column("tg_user_id", sa.BigInteger(), nullable=True),
        sa.Column("tg_username", sa.String(length=64), nullable=True),
        sa.Column("currency", sa.String(length=24), nullable=True),
        sa.Column("tag", sa.String(length=64), nullable=True),
        sa.Column("tz_offset", sa.Integer(), server_default="0", nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("tg_chat_id", name=op.f("pk_bot_users")),
    )

    op.create_table(
        "bot_transactions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("tg_chat_id", sa.BigInteger(), nullable=False),
        sa.Column("value", sa.Text(), nullable=False),
        sa.Column("archived", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_bot_transactions")),
    )
    op.create_index(op.f("ix_bot_transactions_tg_chat_id"), "bot_transactions", ["tg_chat_id"], unique=False)
    op.create_index(op.f("ix_bot_transactions_created_at"), "bot_transactions", ["created_at"], unique=False)
    op.create_index(
        "ix_bot_transactions_chat_archived_created",
        "bot_transactions",
        ["tg_chat_id", "archived", "created_at"],
        unique=False,
    )

    op.create_table(
        "bot_hint_history",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("tg_chat_id", sa.BigInteger(), nullable=False),
        sa.Column("category", sa.String(length=32), nullable=False),
        sa.Column("value", sa.String(length=256), nullable=False),
        sa.Column("last_used", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_bot_hint_history")),
        sa.UniqueConstraint("tg_chat_id", "category", "value", name="uq_bot_hint_history_chat_category_value"),
    )
    op.create_index(
        "ix_bot_hint_history_chat_last_used",
        "bot_hint_history",
        ["tg_chat_id", "last_used"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_bot_hint_history_chat_last_used", table_name="bot_hint_history")
    op.drop_table("bot_hint_history")
    op.drop_index("ix_bot_transactions_chat_archived_created", table_name="bot_transactions")
    op.drop_index(op.f("ix_bot_transactions_created_at"), table_name="bot_transactions")
    op.drop_index(op.f("ix_bot_transactions_tg_chat_id"), table_name="bot_transactions")
    op.drop_table("bot_transactions")
    op.drop_table("bot_users")
