"""Step definitions of the guided transaction flows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Hashable

from beanbot.tx.hints import Enricher, Hint, HintSource, StepRole, enricher_for
from beanbot.tx.parsers import handle_amount, handle_raw

Parser = Callable[[str], str]


@dataclass(frozen=True)
class Step:
    """One field to ask for: its role, base prompt, parser and hint strategy."""

    role: StepRole
    hint: Hint
    parser: Parser
    enricher: Enricher

    @classmethod
    def for_role(cls, role: StepRole, prompt: str, parser: Parser) -> Step:
        return cls(role=role, hint=Hint(prompt=prompt), parser=parser, enricher=enricher_for(role))

    def parse(self, text: str) -> str:
        return self.parser(text)

    def enriched_hint(self, source: HintSource, scope: Hashable) -> Hint:
        return self.enricher(self.hint, source, scope)


def simple_tx_steps(suggested_currency: str) -> tuple[Step, ...]:
    """amount -> from -> to -> description."""

    return (
        Step.for_role(
            StepRole.AMOUNT,
            f"Please enter the amount of money (e.g. '12.34' or '12.34 {suggested_currency}')",
            handle_amount,
        ),
        Step.for_role(
            StepRole.FROM,
            "Please enter the account the money came from (or select one from the list)",
            handle_raw,
        ),
        Step.for_role(
            StepRole.TO,
            "Please enter the account the money went to (or select one from the list)",
            handle_raw,
        ),
        Step.for_role(
            StepRole.DESCRIPTION,
            "Please enter a description (or select one from the list)",
            handle_raw,
        ),
    )
