"""Guided transaction sessions.

A session walks a user through a fixed sequence of steps, one message per
step, and renders the finished transaction as beancount text. Callers only
talk to the abstract ``Tx`` interface so that other transaction shapes can
be added later without touching them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Hashable, Optional, Sequence

from beanbot.errors import IncompleteTransactionError, TransactionStateError
from beanbot.logging_setup import get_logger
from beanbot.tx.hints import Hint, HintSource, StepRole
from beanbot.tx.parsers import BEANCOUNT_DATE_FORMAT, parse_date
from beanbot.tx.steps import Step, simple_tx_steps
from beanbot.tx.template import DOT_INDENT, render_simple_tx

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Tx(ABC):
    """Capability interface of a transaction being entered."""

    @abstractmethod
    def input(self, text: str) -> None:
        """Feed the answer for the current step; raises ``FormatError``."""

    @abstractmethod
    def is_done(self) -> bool:
        ...

    @abstractmethod
    def next_hint(self, source: HintSource, scope: Hashable) -> Optional[Hint]:
        """Hint for the current step, or ``None`` when no step is pending."""

    @abstractmethod
    def render(self, currency: str, tag: str, tz_offset: int) -> str:
        """Beancount text of the finished transaction."""

    @abstractmethod
    def data_keys(self) -> dict[str, str]:
        ...

    @abstractmethod
    def debug(self) -> str:
        ...


class SimpleTx(Tx):
    """Two-posting transaction: amount, from account, to account, description."""

    def __init__(self, steps: Sequence[Step], date: str = "", dot_indent: int = DOT_INDENT) -> None:
        self._steps: tuple[Step, ...] = tuple(steps)
        self._data: list[Optional[str]] = [None] * len(self._steps)
        self._step = 0
        self._date = date
        self._dot_indent = dot_indent

    @property
    def step(self) -> int:
        return self._step

    @property
    def date(self) -> str:
        return self._date

    def input(self, text: str) -> None:
        if self.is_done():
            raise TransactionStateError("all data for this tx has already been gathered")
        value = self._steps[self._step].parse(text)
        self._data[self._step] = value
        self._step += 1

    def is_done(self) -> bool:
        return self._step >= len(self._steps)

    def next_hint(self, source: HintSource, scope: Hashable) -> Optional[Hint]:
        if not 0 <= self._step < len(self._steps):
            logger.debug("No next hint: step %d exceeds max index %d", self._step, len(self._steps) - 1)
            return None
        current = self._steps[self._step]
        logger.debug("Enriching hint (%s).", current.role.value)
        return current.enriched_hint(source, scope)

    def _value(self, role: StepRole) -> str:
        for step, value in zip(self._steps, self._data):
            if step.role is role and value is not None:
                return value
        return ""

    def _set_date_if_empty(self, tz_offset: int) -> bool:
        if self._date:
            return False
        captured = self._value(StepRole.DATE)
        if captured:
            self._date = captured
        else:
            self._date = (_utcnow() + timedelta(hours=tz_offset)).strftime(BEANCOUNT_DATE_FORMAT)
        return True

    def data_keys(self) -> dict[str, str]:
        return {
            "date": self._date,
            "description": self._value(StepRole.DESCRIPTION),
            "account_from": self._value(StepRole.FROM),
            "amount": self._value(StepRole.AMOUNT),
            "account_to": self._value(StepRole.TO),
        }

    def render(self, currency: str, tag: str, tz_offset: int) -> str:
        if not self.is_done():
            raise IncompleteTransactionError()
        self._set_date_if_empty(tz_offset)
        data = self.data_keys()
        return render_simple_tx(
            date=data["date"],
            description=data["description"],
            account_from=data["account_from"],
            account_to=data["account_to"],
            raw_amount=data["amount"],
            currency=currency,
            tag=tag,
            dot_indent=self._dot_indent,
        )

    def debug(self) -> str:
        return f"SimpleTx{{step={self._step}, totalSteps={len(self._steps)}, data={self._data}}}"


def date_from_command(text: str) -> str:
    """Optional ``YYYY-MM-DD`` given after the command, e.g. ``/simple 2023-01-15``."""

    tokens = text.split()
    if len(tokens) >= 2:
        return parse_date(tokens[1])
    return ""


def create_simple_tx(text: str, suggested_currency: str, dot_indent: int = DOT_INDENT) -> SimpleTx:
    """Start a simple transaction from the message that opened it.

    Raises ``FormatError`` when the optional date token is malformed.
    """

    return SimpleTx(simple_tx_steps(suggested_currency), date=date_from_command(text), dot_indent=dot_indent)
