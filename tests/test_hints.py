from __future__ import annotations

import logging

import pytest

from beanbot.tx.hints import (
    Hint,
    HistoryCategory,
    StepRole,
    enricher_for,
    passthrough,
    suggest_history,
    suggest_today,
)


def test_enricher_selected_by_role() -> None:
    assert enricher_for(StepRole.AMOUNT) is passthrough
    assert enricher_for(StepRole.DATE) is suggest_today


def test_date_hint_suggests_today(hint_source) -> None:
    hint = enricher_for(StepRole.DATE)(Hint("When?"), hint_source, 1)
    assert hint == Hint("When?", ("today",))
    assert hint_source.calls == []


def test_history_enricher_does_not_mutate_base_hint(hint_source) -> None:
    base = Hint("Description?")
    enriched = suggest_history(HistoryCategory.DESCRIPTION)(base, hint_source, 7)
    assert enriched.options == ("Groceries", "Rent")
    assert base.options == ()


def test_history_failure_is_logged_and_swallowed(failing_hint_source, caplog: pytest.LogCaptureFixture) -> None:
    base = Hint("From?", ("stale",))
    with caplog.at_level(logging.ERROR, logger="beanbot.tx.hints"):
        hint = enricher_for(StepRole.FROM)(base, failing_hint_source, 7)
    assert hint == Hint("From?")
    assert "history store unavailable" in caplog.text
