"""Handlers managing the stored beancount records of a chat."""

from __future__ import annotations

from aiogram import Router
from aiogram.filters import Command
from aiogram.types import Message
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from beanbot.bot import texts
from beanbot.config import get_settings
from beanbot.services.transaction_service import TransactionService
from beanbot.utils.messages import chunk_records, strip_command

router = Router()


def _unquote(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] == '"':
        return text[1:-1]
    return text


@router.message(Command("comment", "c"))
async def add_comment(message: Message, session_factory: async_sessionmaker[AsyncSession]) -> None:
    """Store a free-text line: /comment "; some note"."""

    comment = _unquote(strip_command(message.text or ""))
    if not comment:
        await message.answer(texts.COMMENT_USAGE)
        return
    async with session_factory() as session:
        await TransactionService().create(session, message.chat.id, comment)
    await message.answer(texts.COMMENT_ADDED)


@router.message(Command("list"))
async def list_records(message: Message, session_factory: async_sessionmaker[AsyncSession]) -> None:
    """Send open (or, with 'archived', archived) records in message-sized chunks."""

    archived = strip_command(message.text or "").lower() == "archived"
    async with session_factory() as session:
        values = await TransactionService().list_values(session, message.chat.id, archived=archived)
    if not values:
        await message.answer(texts.LIST_EMPTY)
        return
    for chunk in chunk_records(values, get_settings().message_max_length):
        await message.answer(chunk)


@router.message(Command("archiveAll"))
async def archive_all(message: Message, session_factory: async_sessionmaker[AsyncSession]) -> None:
    async with session_factory() as session:
        count = await TransactionService().archive_all(session, message.chat.id)
    await message.answer(texts.ARCHIVED_ALL.format(count=count))


@router.message(Command("deleteAll"))
async def delete_all(message: Message, session_factory: async_sessionmaker[AsyncSession]) -> None:
    """Delete every record of the chat; requires '/deleteAll yes'."""

    if strip_command(message.text or "").lower() != "yes":
        await message.answer(texts.DELETE_CONFIRM)
        return
    async with session_factory() as session:
        count = await TransactionService().delete_all(session, message.chat.id)
    await message.answer(texts.DELETED_ALL.format(count=count))
