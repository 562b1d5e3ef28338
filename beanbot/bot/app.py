"""Telegram bot application entrypoint."""

from __future__ import annotations

import asyncio
from datetime import timedelta

from aiogram import Bot, Dispatcher
from aiogram.fsm.storage.memory import MemoryStorage

from beanbot.bot.handlers.main import router as main_router
from beanbot.bot.handlers.preferences import router as preferences_router
from beanbot.bot.handlers.records import router as records_router
from beanbot.bot.registry import TxRegistry
from beanbot.config import Settings, get_settings
from beanbot.database.migrations import run_migrations, should_run_migrations
from beanbot.database.session import DatabaseManager
from beanbot.history.cache import HistoryCache
from beanbot.logging_setup import configure_logging, get_logger
from beanbot.services.hint_service import HintService

logger = get_logger(__name__)


def build_dispatcher(settings: Settings, db_manager: DatabaseManager) -> Dispatcher:
    """Dispatcher with routers and the shared objects handlers receive by name."""

    cache = HistoryCache(ttl=timedelta(seconds=settings.hint_cache_ttl_seconds))
    dispatcher = Dispatcher(
        storage=MemoryStorage(),
        registry=TxRegistry(),
        hint_service=HintService(cache, limit=settings.hint_limit),
        session_factory=db_manager.session_factory,
    )
    dispatcher.include_router(records_router)
    dispatcher.include_router(preferences_router)
    # Last: its catch-all text handler must not shadow the others.
    dispatcher.include_router(main_router)
    return dispatcher


async def run_bot() -> None:
    """Run polling bot process."""

    settings = get_settings()
    configure_logging(settings.log_level)
    if not settings.telegram_bot_token:
        raise RuntimeError("TELEGRAM_BOT_TOKEN is not configured")

    if should_run_migrations(settings):
        logger.info("Applying database migrations")
        await run_migrations(settings)

    db_manager = DatabaseManager(settings)
    bot = Bot(token=settings.telegram_bot_token)
    dispatcher = build_dispatcher(settings, db_manager)
    try:
        await dispatcher.start_polling(bot)
    finally:
        await db_manager.dispose()


def main() -> None:
    asyncio.run(run_bot())


if __name__ == "__main__":
    main()
