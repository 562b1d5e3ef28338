from __future__ import annotations

import io
import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from beanbot import logging_setup
from beanbot.config import Settings, get_settings
from beanbot.database.migrations import alembic_config, should_run_migrations
from beanbot.schemas.user import UserPreferences


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DOT_INDENT", "52")
    monkeypatch.setenv("DEFAULT_CURRENCY", "CHF")
    get_settings.cache_clear()
    settings = get_settings()
    assert settings.dot_indent == 52
    assert settings.default_currency == "CHF"
    assert settings.message_max_length == 4096


def test_settings_reject_non_positive_ttl() -> None:
    with pytest.raises(ValidationError):
        Settings(hint_cache_ttl_seconds=0)


@pytest.mark.parametrize("currency", ["EUR", "usd", "VACHR", "BTC.X", "A"])
def test_preferences_accept_commodities(currency: str) -> None:
    assert UserPreferences(currency=currency).currency == currency.upper()


@pytest.mark.parametrize("currency", ["", "E U R", "1EUR", "EUR-"])
def test_preferences_reject_bad_commodities(currency: str) -> None:
    with pytest.raises(ValidationError):
        UserPreferences(currency=currency)


def test_migrations_follow_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    assert should_run_migrations() is False
    monkeypatch.setenv("RUN_MIGRATIONS_ON_STARTUP", "true")
    get_settings.cache_clear()
    assert should_run_migrations() is True

    cfg = alembic_config(Settings(database_url="sqlite+aiosqlite:///bot.db"))
    assert cfg.get_main_option("sqlalchemy.url") == "sqlite+aiosqlite:///bot.db"
    assert Path(cfg.get_main_option("script_location"), "env.py").is_file()


def test_configure_logging_routes_package_and_framework_logs(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(logging_setup, "_CONFIGURED", False)
    stream = io.StringIO()
    loggers = [logging.getLogger(name) for name in ("beanbot", "beanbot-test-framework")]
    saved = [(lg.handlers[:], lg.level, lg.propagate) for lg in loggers]
    try:
        logging_setup.configure_logging(
            "info", fmt="%(levelname)s %(message)s", stream=stream, framework_loggers=("beanbot-test-framework",)
        )
        logging_setup.get_logger("beanbot.tx").info("%sopened", logging_setup.chat_prefix(5))
        logging.getLogger("beanbot-test-framework").info("update handled")
        logging.getLogger("beanbot-test-framework").warning("polling failed")
    finally:
        for lg, (handlers, level, propagate) in zip(loggers, saved):
            lg.handlers[:] = handlers
            lg.setLevel(level)
            lg.propagate = propagate

    assert stream.getvalue().splitlines() == ["INFO [C5] opened", "WARNING polling failed"]
