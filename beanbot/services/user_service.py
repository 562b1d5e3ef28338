"""Users and their formatting preferences."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from beanbot.config import get_settings
from beanbot.database.models import User
from beanbot.logging_setup import chat_prefix, get_logger
from beanbot.schemas.user import UserPreferences

logger = get_logger(__name__)


def _to_preferences(user: Optional[User]) -> UserPreferences:
    default_currency = get_settings().default_currency
    if user is None:
        return UserPreferences(currency=default_currency)
    return UserPreferences(
        currency=user.currency or default_currency,
        tag=user.tag or "",
        tz_offset=user.tz_offset or 0,
    )


class UserService:
    """Register chats and read/update their preferences."""

    async def get_user(self, session: AsyncSession, chat_id: int) -> Optional[User]:
        result = await session.execute(select(User).where(User.tg_chat_id == chat_id))
        return result.scalar_one_or_none()

    async def ensure_user(
        self,
        session: AsyncSession,
        chat_id: int,
        user_id: Optional[int] = None,
        username: Optional[str] = None,
    ) -> User:
        """Create the user on first contact and keep Telegram attributes current."""

        async with session.begin():
            user = await self.get_user(session, chat_id)
            if user is None:
                logger.info("%sCreating user: {userId: %s, username: %s}", chat_prefix(chat_id), user_id, username)
                user = User(tg_chat_id=chat_id, tg_user_id=user_id, tg_username=username, tz_offset=0)
                session.add(user)
            elif user.tg_user_id != user_id or user.tg_username != username:
                logger.info("%sUpdating user attributes: {userId: %s, username: %s}", chat_prefix(chat_id), user_id, username)
                user.tg_user_id = user_id
                user.tg_username = username
            await session.flush()
            return user

    async def get_preferences(self, session: AsyncSession, chat_id: int) -> UserPreferences:
        """Preferences of the chat, with configured defaults for unset values."""

        return _to_preferences(await self.get_user(session, chat_id))

    async def _update(self, session: AsyncSession, chat_id: int, **values) -> UserPreferences:
        async with session.begin():
            user = await self.get_user(session, chat_id)
            if user is None:
                user = User(tg_chat_id=chat_id, tz_offset=0)
                session.add(user)
            for key, value in values.items():
                setattr(user, key, value)
            await session.flush()
            return _to_preferences(user)

    async def set_currency(self, session: AsyncSession, chat_id: int, currency: str) -> UserPreferences:
        validated = UserPreferences(currency=currency)
        return await self._update(session, chat_id, currency=validated.currency)

    async def set_tag(self, session: AsyncSession, chat_id: int, tag: str) -> UserPreferences:
        """Set the default tag; an empty tag clears it."""

        validated = UserPreferences(currency=get_settings().default_currency, tag=tag)
        return await self._update(session, chat_id, tag=validated.tag or None)

    async def set_tz_offset(self, session: AsyncSession, chat_id: int, tz_offset: int) -> UserPreferences:
        validated = UserPreferences(currency=get_settings().default_currency, tz_offset=tz_offset)
        return await self._update(session, chat_id, tz_offset=validated.tz_offset)
