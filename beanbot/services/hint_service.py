"""Suggestion history: persisted values feeding the in-memory hint cache."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Mapping

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from beanbot.database.models import HintHistory
from beanbot.history.cache import HistoryCache
from beanbot.logging_setup import chat_prefix, get_logger
from beanbot.tx.hints import HistoryCategory

logger = get_logger(__name__)

# Field names of ``Tx.data_keys()`` remembered as suggestions.
DATA_KEY_CATEGORIES: dict[str, HistoryCategory] = {
    "description": HistoryCategory.DESCRIPTION,
    "account_from": HistoryCategory.ACCOUNT_FROM,
    "account_to": HistoryCategory.ACCOUNT_TO,
}


def categorize(data_keys: Mapping[str, str]) -> dict[HistoryCategory, str]:
    """Pick the history-relevant, non-empty values out of a transaction's data."""

    return {
        category: data_keys[key]
        for key, category in DATA_KEY_CATEGORIES.items()
        if data_keys.get(key)
    }


class HintService:
    """Load suggestion history into the cache and remember new values."""

    def __init__(self, cache: HistoryCache, limit: int = 10) -> None:
        self._cache = cache
        self._limit = limit

    @property
    def cache(self) -> HistoryCache:
        return self._cache

    async def list_values(self, session: AsyncSession, chat_id: int, category: HistoryCategory) -> list[str]:
        """Most recently used values first."""

        result = await session.execute(
            select(HintHistory.value)
            .where(HintHistory.tg_chat_id == chat_id, HintHistory.category == category.value)
            .order_by(HintHistory.last_used.desc(), HintHistory.id.desc())
            .limit(self._limit)
        )
        return list(result.scalars().all())

    async def load(self, session: AsyncSession, chat_id: int, force: bool = False) -> None:
        """Fill the cache for ``chat_id`` unless it is still fresh."""

        if not force and self._cache.is_fresh(chat_id):
            return
        values = {category: await self.list_values(session, chat_id, category) for category in HistoryCategory}
        self._cache.put(chat_id, values)
        logger.debug("%sLoaded hint history: %s", chat_prefix(chat_id), {c.value: len(v) for c, v in values.items()})

    async def record(self, session: AsyncSession, chat_id: int, values: Mapping[HistoryCategory, str]) -> None:
        """Remember used values (or refresh their last use) and drop the stale cache."""

        now = datetime.now(timezone.utc)
        async with session.begin():
            for category, value in values.items():
                result = await session.execute(
                    select(HintHistory).where(
                        HintHistory.tg_chat_id == chat_id,
                        HintHistory.category == category.value,
                        HintHistory.value == value,
                    )
                )
                existing = result.scalar_one_or_none()
                if existing is None:
                    session.add(HintHistory(tg_chat_id=chat_id, category=category.value, value=value, last_used=now))
                else:
                    existing.last_used = now
        self._cache.invalidate(chat_id)
