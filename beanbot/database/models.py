from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, Boolean, DateTime, Index, Integer, String, Text, UniqueConstraint, false, func
from sqlalchemy.orm import Mapped, mapped_column

from beanbot.database.base import Base


class User(Base):
    """Telegram chat using the bot, with its formatting preferences."""

    __tablename__ = "bot_users"

    tg_chat_id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    tg_user_id: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)
    tg_username: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    currency: Mapped[Optional[str]] = mapped_column(String(24), nullable=True)
    tag: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    tz_offset: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class TransactionRecord(Base):
    """Rendered beancount text (or comment line) waiting to be exported."""

    __tablename__ = "bot_transactions"
    __table_args__ = (Index("ix_bot_transactions_chat_archived_created", "tg_chat_id", "archived", "created_at"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    tg_chat_id: Mapped[int] = mapped_column(BigInteger, index=True)
    value: Mapped[str] = mapped_column(Text)
    archived: Mapped[bool] = mapped_column(Boolean, default=False, server_default=false())
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), index=True)


class HintHistory(Base):
    """Previously entered value offered again as a suggestion."""

    __tablename__ = "bot_hint_history"
    __table_args__ = (
        UniqueConstraint("tg_chat_id", "category", "value", name="uq_bot_hint_history_chat_category_value"),
        Index("ix_bot_hint_history_chat_last_used", "tg_chat_id", "last_used"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    tg_chat_id: Mapped[int] = mapped_column(BigInteger)
    category: Mapped[str] = mapped_column(String(32))
    value: Mapped[str] = mapped_column(String(256))
    last_used: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
