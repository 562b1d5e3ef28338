"""Guided transaction entry: parsers, steps, sessions and rendering."""

from beanbot.tx.hints import Hint, HintSource, HistoryCategory, StepRole
from beanbot.tx.parsers import handle_amount, handle_date, handle_raw, parse_amount, parse_date
from beanbot.tx.session import SimpleTx, Tx, create_simple_tx

__all__ = [
    "Hint",
    "HintSource",
    "HistoryCategory",
    "StepRole",
    "SimpleTx",
    "Tx",
    "create_simple_tx",
    "handle_amount",
    "handle_date",
    "handle_raw",
    "parse_amount",
    "parse_date",
]
