from __future__ import annotations

from datetime import timedelta

import pytest
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from beanbot.history.cache import HistoryCache
from beanbot.services.hint_service import HintService, categorize
from beanbot.services.transaction_service import TransactionService
from beanbot.services.user_service import UserService
from beanbot.tx.hints import HistoryCategory
from beanbot.tx.session import create_simple_tx


@pytest.mark.asyncio
async def test_preferences_default_to_settings(session_factory: async_sessionmaker[AsyncSession]) -> None:
    service = UserService()
    async with session_factory() as session:
        prefs = await service.get_preferences(session, 12345)
    assert (prefs.currency, prefs.tag, prefs.tz_offset) == ("EUR", "", 0)


@pytest.mark.asyncio
async def test_ensure_user_creates_and_updates(session_factory: async_sessionmaker[AsyncSession]) -> None:
    service = UserService()
    async with session_factory() as session:
        await service.ensure_user(session, 12345, user_id=1, username="alice")
    async with session_factory() as session:
        await service.ensure_user(session, 12345, user_id=1, username="alice_renamed")
    async with session_factory() as session:
        user = await service.get_user(session, 12345)
    assert user.tg_username == "alice_renamed"
    assert user.tz_offset == 0


@pytest.mark.asyncio
async def test_update_preferences(session_factory: async_sessionmaker[AsyncSession]) -> None:
    service = UserService()
    async with session_factory() as session:
        assert (await service.set_currency(session, 12345, " usd ")).currency == "USD"
    async with session_factory() as session:
        assert (await service.set_tag(session, 12345, "#vacation2021")).tag == "vacation2021"
    async with session_factory() as session:
        assert (await service.set_tz_offset(session, 12345, -5)).tz_offset == -5
    async with session_factory() as session:
        prefs = await service.get_preferences(session, 12345)
    assert (prefs.currency, prefs.tag, prefs.tz_offset) == ("USD", "vacation2021", -5)

    async with session_factory() as session:
        assert (await service.set_tag(session, 12345, "")).tag == ""


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("method", "value"),
    [("set_currency", "not a currency"), ("set_tag", "two words"), ("set_tz_offset", 15)],
)
async def test_invalid_preferences_are_rejected(
    session_factory: async_sessionmaker[AsyncSession], method: str, value
) -> None:
    async with session_factory() as session:
        with pytest.raises(ValidationError):
            await getattr(UserService(), method)(session, 12345, value)


@pytest.mark.asyncio
async def test_transaction_lifecycle(session_factory: async_sessionmaker[AsyncSession]) -> None:
    service = TransactionService()
    for value in ("first\n", "second\n"):
        async with session_factory() as session:
            await service.create(session, 12345, value)
    async with session_factory() as session:
        await service.create(session, 999, "other chat\n")

    async with session_factory() as session:
        assert await service.list_values(session, 12345) == ["first\n", "second\n"]
    async with session_factory() as session:
        assert await service.archive_all(session, 12345) == 2
    async with session_factory() as session:
        assert await service.list_values(session, 12345) == []
    async with session_factory() as session:
        assert await service.list_values(session, 12345, archived=True) == ["first\n", "second\n"]
    async with session_factory() as session:
        assert await service.delete_all(session, 12345) == 2
    async with session_factory() as session:
        assert await service.list_values(session, 999) == ["other chat\n"]


def test_categorize_skips_empty_values() -> None:
    tx = create_simple_tx("/simple", "EUR")
    for value in ("17.34", "Assets:Wallet", "Expenses:Groceries", ""):
        tx.input(value)
    assert categorize(tx.data_keys()) == {
        HistoryCategory.ACCOUNT_FROM: "Assets:Wallet",
        HistoryCategory.ACCOUNT_TO: "Expenses:Groceries",
    }


@pytest.mark.asyncio
async def test_hint_history_round_trip(session_factory: async_sessionmaker[AsyncSession]) -> None:
    cache = HistoryCache(ttl=timedelta(minutes=15))
    service = HintService(cache, limit=3)

    for description in ("Rent", "Groceries", "Coffee", "Fuel", "Rent"):
        async with session_factory() as session:
            await service.record(
                session,
                12345,
                {HistoryCategory.DESCRIPTION: description, HistoryCategory.ACCOUNT_FROM: "Assets:Wallet"},
            )
    assert not cache.is_fresh(12345)

    async with session_factory() as session:
        await service.load(session, 12345)
    assert cache.get_hints(HistoryCategory.DESCRIPTION, 12345) == ["Rent", "Fuel", "Coffee"]
    assert cache.get_hints(HistoryCategory.ACCOUNT_FROM, 12345) == ["Assets:Wallet"]
    assert cache.get_hints(HistoryCategory.ACCOUNT_TO, 12345) == []


@pytest.mark.asyncio
async def test_hint_load_skips_fresh_cache(session_factory: async_sessionmaker[AsyncSession]) -> None:
    cache = HistoryCache(ttl=timedelta(minutes=15))
    cache.put(12345, {HistoryCategory.DESCRIPTION: ["cached"]})
    service = HintService(cache)

    async with session_factory() as session:
        await service.load(session, 12345)
    assert cache.get_hints(HistoryCategory.DESCRIPTION, 12345) == ["cached"]

    async with session_factory() as session:
        await service.load(session, 12345, force=True)
    assert cache.get_hints(HistoryCategory.DESCRIPTION, 12345) == []
