"""Persistence of rendered transactions and comments."""

from __future__ import annotations

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from beanbot.database.models import TransactionRecord
from beanbot.logging_setup import chat_prefix, get_logger

logger = get_logger(__name__)


class TransactionService:
    """Store, list, archive and delete a chat's beancount records."""

    async def create(self, session: AsyncSession, chat_id: int, value: str) -> TransactionRecord:
        """Persist one rendered transaction or comment."""

        async with session.begin():
            record = TransactionRecord(tg_chat_id=chat_id, value=value, archived=False)
            session.add(record)
            await session.flush()
            await session.refresh(record)
            logger.info("%sStored record #%d", chat_prefix(chat_id), record.id)
            return record

    async def list_values(self, session: AsyncSession, chat_id: int, archived: bool = False) -> list[str]:
        """Texts of the chat's records, oldest first."""

        result = await session.execute(
            select(TransactionRecord.value)
            .where(TransactionRecord.tg_chat_id == chat_id, TransactionRecord.archived.is_(archived))
            .order_by(TransactionRecord.created_at, TransactionRecord.id)
        )
        return list(result.scalars().all())

    async def archive_all(self, session: AsyncSession, chat_id: int) -> int:
        """Mark every open record archived; returns how many changed."""

        async with session.begin():
            result = await session.execute(
                update(TransactionRecord)
                .where(TransactionRecord.tg_chat_id == chat_id, TransactionRecord.archived.is_(False))
                .values(archived=True)
            )
        return result.rowcount or 0

    async def delete_all(self, session: AsyncSession, chat_id: int) -> int:
        """Permanently remove every record of the chat."""

        async with session.begin():
            result = await session.execute(delete(TransactionRecord).where(TransactionRecord.tg_chat_id == chat_id))
        logger.info("%sDeleted %d records", chat_prefix(chat_id), result.rowcount or 0)
        return result.rowcount or 0
