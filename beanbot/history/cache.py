"""Time-bounded cache of suggestion history per conversation."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Hashable, Mapping, Sequence

from beanbot.errors import HintLookupError
from beanbot.tx.hints import HistoryCategory


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class _CacheEntry:
    expiry: datetime
    values: dict[HistoryCategory, list[str]] = field(default_factory=dict)


class HistoryCache:
    """Suggestions loaded from storage, kept for a fixed time-to-live.

    Serves the synchronous ``HintSource`` lookups of transaction sessions.
    A missing or expired scope raises ``HintLookupError``.
    """

    def __init__(self, ttl: timedelta, clock: Callable[[], datetime] = _utcnow) -> None:
        if ttl <= timedelta(0):
            raise ValueError("ttl must be positive")
        self._ttl = ttl
        self._clock = clock
        self._entries: dict[Hashable, _CacheEntry] = {}

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def put(self, scope: Hashable, values: Mapping[HistoryCategory, Sequence[str]]) -> None:
        """Replace the cached history of ``scope``."""

        self._entries[scope] = _CacheEntry(
            expiry=self._clock() + self._ttl,
            values={category: list(items) for category, items in values.items()},
        )

    def is_fresh(self, scope: Hashable) -> bool:
        entry = self._entries.get(scope)
        return entry is not None and entry.expiry > self._clock()

    def invalidate(self, scope: Hashable) -> None:
        self._entries.pop(scope, None)

    def prune(self) -> int:
        """Drop expired scopes; returns how many were removed."""

        now = self._clock()
        expired = [scope for scope, entry in self._entries.items() if entry.expiry <= now]
        for scope in expired:
            del self._entries[scope]
        return len(expired)

    def get_hints(self, category: HistoryCategory, scope: Hashable) -> list[str]:
        if not self.is_fresh(scope):
            raise HintLookupError(f"no history cached for scope {scope}")
        return list(self._entries[scope].values.get(category, []))

    def __len__(self) -> int:
        return len(self._entries)
