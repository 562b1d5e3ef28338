"""Async engine and session factory shared by the bot handlers."""

from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from beanbot.config import Settings, get_settings
from beanbot.database.base import Base


class DatabaseManager:
    """Owns the engine; handlers open short-lived sessions from ``session_factory``.

    ``url`` overrides ``Settings.database_url``, e.g. for a local sqlite file.
    """

    def __init__(self, settings: Optional[Settings] = None, *, url: Optional[str] = None) -> None:
        settings = settings or get_settings()
        self.url = url or settings.database_url
        engine_options = {"echo": settings.debug}
        if not self.url.startswith("sqlite"):
            engine_options["pool_pre_ping"] = True
        self._engine = create_async_engine(self.url, **engine_options)
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    async def create_schema(self) -> None:
        """Create missing tables without Alembic (sqlite files, tests)."""

        async with self._engine.begin() as connection:
            await connection.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self._engine.dispose()

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        return self._session_factory
