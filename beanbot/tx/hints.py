"""Prompt hints and the strategies enriching them with history suggestions."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Hashable, Protocol

from beanbot.logging_setup import get_logger

logger = get_logger(__name__)


class StepRole(str, Enum):
    """Role a step plays in a transaction."""

    AMOUNT = "amount"
    FROM = "from"
    TO = "to"
    DESCRIPTION = "description"
    DATE = "date"


class HistoryCategory(str, Enum):
    """Kinds of previously entered values kept as suggestions."""

    DESCRIPTION = "description"
    ACCOUNT_FROM = "account_from"
    ACCOUNT_TO = "account_to"


@dataclass(frozen=True)
class Hint:
    """Prompt plus ordered quick-reply suggestions for the current step."""

    prompt: str
    options: tuple[str, ...] = field(default_factory=tuple)


class HintSource(Protocol):
    """Read access to suggestion history, scoped per conversation."""

    def get_hints(self, category: HistoryCategory, scope: Hashable) -> list[str]:
        ...


Enricher = Callable[[Hint, HintSource, Hashable], Hint]


def passthrough(hint: Hint, source: HintSource, scope: Hashable) -> Hint:
    return hint


def suggest_today(hint: Hint, source: HintSource, scope: Hashable) -> Hint:
    return replace(hint, options=("today",))


def suggest_history(category: HistoryCategory) -> Enricher:
    """Build an enricher that offers history entries of ``category``.

    Lookup failures leave the prompt as-is with no suggestions.
    """

    def enrich(hint: Hint, source: HintSource, scope: Hashable) -> Hint:
        try:
            values = source.get_hints(category, scope)
        except Exception as exc:  # noqa: BLE001
            logger.error("Error occurred getting cached hint (%s, scope=%s): %s", category.value, scope, exc)
            return replace(hint, options=())
        return replace(hint, options=tuple(values))

    return enrich


ENRICHERS: dict[StepRole, Enricher] = {
    StepRole.DESCRIPTION: suggest_history(HistoryCategory.DESCRIPTION),
    StepRole.FROM: suggest_history(HistoryCategory.ACCOUNT_FROM),
    StepRole.TO: suggest_history(HistoryCategory.ACCOUNT_TO),
    StepRole.DATE: suggest_today,
}


def enricher_for(role: StepRole) -> Enricher:
    """Strategy bound to a step of the given role."""

    return ENRICHERS.get(role, passthrough)
