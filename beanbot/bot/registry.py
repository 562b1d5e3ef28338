"""Open transactions per chat."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from beanbot.tx.session import Tx


class TxRegistry:
    """Maps chat ids to their open transaction.

    Handlers hold ``lock(chat_id)`` while touching a chat's transaction so
    updates of one chat are applied one after another. A chat's lock only
    lives while some handler holds or waits for it.
    """

    def __init__(self) -> None:
        self._txs: dict[int, Tx] = {}
        self._locks: dict[int, asyncio.Lock] = {}
        self._lock_users: dict[int, int] = {}

    @asynccontextmanager
    async def lock(self, chat_id: int) -> AsyncIterator[None]:
        lock = self._locks.get(chat_id)
        if lock is None:
            lock = self._locks[chat_id] = asyncio.Lock()
        self._lock_users[chat_id] = self._lock_users.get(chat_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[chat_id] -= 1
            if not self._lock_users[chat_id]:
                del self._lock_users[chat_id]
                del self._locks[chat_id]

    def get(self, chat_id: int) -> Optional[Tx]:
        return self._txs.get(chat_id)

    def put(self, chat_id: int, tx: Tx) -> Optional[Tx]:
        """Register ``tx``; returns the transaction it replaced, if any."""

        previous = self._txs.get(chat_id)
        self._txs[chat_id] = tx
        return previous

    def pop(self, chat_id: int) -> Optional[Tx]:
        return self._txs.pop(chat_id, None)

    def __contains__(self, chat_id: object) -> bool:
        return chat_id in self._txs

    def __len__(self) -> int:
        return len(self._txs)
