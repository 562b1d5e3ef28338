"""Telegram bot handlers for the guided transaction flow."""

from __future__ import annotations

from aiogram import F, Router
from aiogram.filters import Command, CommandStart
from aiogram.fsm.context import FSMContext
from aiogram.types import Message, ReplyKeyboardRemove
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from beanbot.bot import texts
from beanbot.bot.keyboards.hints import hint_keyboard
from beanbot.bot.registry import TxRegistry
from beanbot.bot.states.tx import TxStates
from beanbot.config import get_settings
from beanbot.errors import FormatError
from beanbot.logging_setup import chat_prefix, get_logger
from beanbot.schemas.user import UserPreferences
from beanbot.services.hint_service import HintService, categorize
from beanbot.services.transaction_service import TransactionService
from beanbot.services.user_service import UserService
from beanbot.tx.session import Tx, create_simple_tx

logger = get_logger(__name__)

router = Router()


async def _ensure_user(message: Message, session_factory: async_sessionmaker[AsyncSession]) -> None:
    sender = message.from_user
    async with session_factory() as session:
        await UserService().ensure_user(
            session,
            message.chat.id,
            user_id=sender.id if sender else None,
            username=sender.username if sender else None,
        )


async def _send_next_hint(
    message: Message,
    tx: Tx,
    hint_service: HintService,
    session_factory: async_sessionmaker[AsyncSession],
) -> None:
    chat_id = message.chat.id
    try:
        async with session_factory() as session:
            await hint_service.load(session, chat_id)
    except Exception as exc:  # noqa: BLE001
        logger.error("%sLoading hint history failed: %s", chat_prefix(chat_id), exc)

    hint = tx.next_hint(hint_service.cache, chat_id)
    if hint is None:
        logger.warning("%sNo hint available for %s", chat_prefix(chat_id), tx.debug())
        return
    await message.answer(hint.prompt, reply_markup=hint_keyboard(hint.options))


async def _finish_tx(
    message: Message,
    tx: Tx,
    hint_service: HintService,
    session_factory: async_sessionmaker[AsyncSession],
) -> None:
    chat_id = message.chat.id
    try:
        async with session_factory() as session:
            prefs = await UserService().get_preferences(session, chat_id)
    except Exception as exc:  # noqa: BLE001
        logger.error("%sLoading preferences failed, using defaults: %s", chat_prefix(chat_id), exc)
        prefs = UserPreferences(currency=get_settings().default_currency)
    rendered = tx.render(prefs.currency, prefs.tag, prefs.tz_offset)

    try:
        async with session_factory() as session:
            await TransactionService().create(session, chat_id, rendered)
    except Exception as exc:  # noqa: BLE001
        logger.error("%sStoring transaction failed: %s (%s)", chat_prefix(chat_id), exc, tx.debug())
        await message.answer(texts.TX_SAVE_FAILED.format(error=exc), reply_markup=ReplyKeyboardRemove())
        await message.answer(rendered)
        return

    try:
        async with session_factory() as session:
            await hint_service.record(session, chat_id, categorize(tx.data_keys()))
    except Exception as exc:  # noqa: BLE001
        logger.error("%sRecording hint history failed: %s", chat_prefix(chat_id), exc)

    await message.answer(texts.TX_RECORDED, reply_markup=ReplyKeyboardRemove())
    await message.answer(rendered)


@router.message(CommandStart())
async def on_start(message: Message, session_factory: async_sessionmaker[AsyncSession]) -> None:
    """Register the chat and show help."""

    await _ensure_user(message, session_factory)
    await message.answer(texts.WELCOME)
    await message.answer(texts.HELP)


@router.message(Command("help"))
async def on_help(message: Message) -> None:
    await message.answer(texts.HELP)


@router.message(Command("simple", "s"))
async def start_simple_tx(
    message: Message,
    state: FSMContext,
    registry: TxRegistry,
    hint_service: HintService,
    session_factory: async_sessionmaker[AsyncSession],
) -> None:
    """Open a simple transaction, optionally dated: /simple 2023-01-15."""

    chat_id = message.chat.id
    await _ensure_user(message, session_factory)
    async with session_factory() as session:
        prefs = await UserService().get_preferences(session, chat_id)

    try:
        tx = create_simple_tx(message.text or "", prefs.currency, dot_indent=get_settings().dot_indent)
    except FormatError as exc:
        await message.answer(texts.TX_CREATE_FAILED.format(error=exc.message))
        return

    async with registry.lock(chat_id):
        previous = registry.put(chat_id, tx)
        await state.set_state(TxStates.collecting)
        if previous is not None:
            logger.info("%sReplacing open transaction %s", chat_prefix(chat_id), previous.debug())
            await message.answer(texts.TX_REPLACED)
        await _send_next_hint(message, tx, hint_service, session_factory)


@router.message(Command("cancel"))
async def cancel_tx(message: Message, state: FSMContext, registry: TxRegistry) -> None:
    chat_id = message.chat.id
    async with registry.lock(chat_id):
        tx = registry.pop(chat_id)
        await state.clear()
    if tx is None:
        await message.answer(texts.NO_TX_TO_CANCEL, reply_markup=ReplyKeyboardRemove())
        return
    logger.info("%sCancelled transaction %s", chat_prefix(chat_id), tx.debug())
    await message.answer(texts.TX_CANCELLED, reply_markup=ReplyKeyboardRemove())


@router.message(TxStates.collecting, F.text, ~F.text.startswith("/"))
async def on_tx_input(
    message: Message,
    state: FSMContext,
    registry: TxRegistry,
    hint_service: HintService,
    session_factory: async_sessionmaker[AsyncSession],
) -> None:
    """Feed the next field of the open transaction."""

    chat_id = message.chat.id
    async with registry.lock(chat_id):
        tx = registry.get(chat_id)
        if tx is None:
            await state.clear()
            await message.answer(texts.NO_OPEN_TX)
            return

        try:
            tx.input(message.text)
        except FormatError as exc:
            logger.info("%sRejected input: %s", chat_prefix(chat_id), exc.message)
            await message.answer(texts.TX_INPUT_FAILED.format(error=exc.message))
            await _send_next_hint(message, tx, hint_service, session_factory)
            return
        logger.debug("%s%s", chat_prefix(chat_id), tx.debug())

        if not tx.is_done():
            await _send_next_hint(message, tx, hint_service, session_factory)
            return

        registry.pop(chat_id)
        await state.clear()
        await _finish_tx(message, tx, hint_service, session_factory)


@router.message(F.text, ~F.text.startswith("/"))
async def on_text_without_tx(message: Message) -> None:
    await message.answer(texts.NO_OPEN_TX)
