"""Handlers for per-chat formatting preferences."""

from __future__ import annotations

from aiogram import Router
from aiogram.filters import Command
from aiogram.types import Message
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from beanbot.bot import texts
from beanbot.services.user_service import UserService
from beanbot.utils.messages import strip_command

router = Router()


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors()
    return errors[0]["msg"] if errors else str(exc)


@router.message(Command("currency"))
async def currency_command(message: Message, session_factory: async_sessionmaker[AsyncSession]) -> None:
    """Show or set the default currency: /currency USD."""

    value = strip_command(message.text or "")
    service = UserService()
    async with session_factory() as session:
        if not value:
            prefs = await service.get_preferences(session, message.chat.id)
            await message.answer(texts.CURRENCY_SHOW.format(currency=prefs.currency))
            return
        try:
            prefs = await service.set_currency(session, message.chat.id, value)
        except ValidationError as exc:
            await message.answer(texts.INVALID_VALUE.format(error=_first_error(exc)))
            return
    await message.answer(texts.CURRENCY_SET.format(currency=prefs.currency))


@router.message(Command("tag"))
async def tag_command(message: Message, session_factory: async_sessionmaker[AsyncSession]) -> None:
    """Show, set or remove the default tag: /tag vacation2021, /tag off."""

    value = strip_command(message.text or "")
    service = UserService()
    async with session_factory() as session:
        if not value:
            prefs = await service.get_preferences(session, message.chat.id)
            if prefs.tag:
                await message.answer(texts.TAG_SHOW.format(tag=prefs.tag))
            else:
                await message.answer(texts.TAG_NONE)
            return
        try:
            prefs = await service.set_tag(session, message.chat.id, "" if value.lower() == "off" else value)
        except ValidationError as exc:
            await message.answer(texts.INVALID_VALUE.format(error=_first_error(exc)))
            return
    if prefs.tag:
        await message.answer(texts.TAG_SET.format(tag=prefs.tag))
    else:
        await message.answer(texts.TAG_REMOVED)


@router.message(Command("tz"))
async def tz_command(message: Message, session_factory: async_sessionmaker[AsyncSession]) -> None:
    """Show or set the timezone offset in whole hours: /tz -5."""

    value = strip_command(message.text or "")
    service = UserService()
    async with session_factory() as session:
        if not value:
            prefs = await service.get_preferences(session, message.chat.id)
            await message.answer(texts.TZ_SHOW.format(offset=prefs.tz_offset))
            return
        try:
            prefs = await service.set_tz_offset(session, message.chat.id, int(value))
        except (ValueError, ValidationError):
            await message.answer(texts.TZ_INVALID)
            return
    await message.answer(texts.TZ_SET.format(offset=prefs.tz_offset))
