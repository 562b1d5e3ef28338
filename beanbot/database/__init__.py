"""Database package exports."""

from beanbot.database.base import Base
from beanbot.database.models import HintHistory, TransactionRecord, User

__all__ = ["Base", "User", "TransactionRecord", "HintHistory"]
