"""In-memory suggestion history."""

from beanbot.history.cache import HistoryCache

__all__ = ["HistoryCache"]
