from __future__ import annotations

from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from beanbot.config import get_settings
from beanbot.database.session import DatabaseManager


@pytest.fixture(autouse=True)
def _settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set deterministic test env and reset cached Settings."""

    monkeypatch.setenv("DEBUG", "false")
    monkeypatch.setenv("DEFAULT_CURRENCY", "EUR")
    monkeypatch.setenv("DOT_INDENT", "47")
    monkeypatch.setenv("HINT_LIMIT", "3")
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "test-bot-token")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest_asyncio.fixture
async def session_factory(tmp_path: Path) -> async_sessionmaker[AsyncSession]:
    """Provide isolated sqlite session factory per test."""

    manager = DatabaseManager(url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await manager.create_schema()
    try:
        yield manager.session_factory
    finally:
        await manager.dispose()


class StaticHintSource:
    """History source answering from a fixed mapping."""

    def __init__(self, values: dict | None = None) -> None:
        self.values = values or {}
        self.calls: list[tuple] = []

    def get_hints(self, category, scope) -> list[str]:
        self.calls.append((category, scope))
        return list(self.values.get(category, []))


class FailingHintSource:
    def get_hints(self, category, scope) -> list[str]:
        raise RuntimeError("history store unavailable")


@pytest.fixture
def hint_source() -> StaticHintSource:
    from beanbot.tx.hints import HistoryCategory

    return StaticHintSource(
        {
            HistoryCategory.DESCRIPTION: ["Groceries", "Rent"],
            HistoryCategory.ACCOUNT_FROM: ["Assets:Wallet", "Assets:Bank"],
            HistoryCategory.ACCOUNT_TO: ["Expenses:Groceries"],
        }
    )


@pytest.fixture
def failing_hint_source() -> FailingHintSource:
    return FailingHintSource()
