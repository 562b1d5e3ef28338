from __future__ import annotations

import re

import pytest

from beanbot.errors import FormatError
from beanbot.tx.parsers import (
    count_leading_digits,
    handle_amount,
    handle_date,
    handle_raw,
    parse_amount,
    parse_date,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("17.34", "17.34"),
        ("  17.34 ", "17.34"),
        ("12,5", "12.50"),
        ("5", "5.00"),
        ("-5", "5.00"),
        ("5 USD", "5.00 USD"),
        ("-5,1 CHF", "5.10 CHF"),
        ("17.234", "17.234"),
        ("10+5", "15.00"),
        ("0.1+0.2", "0.30"),
        ("1,5+2,25 USD", "3.75 USD"),
        ("2*3", "6.00"),
        ("2.5*4 EUR", "10.00 EUR"),
    ],
)
def test_handle_amount(text: str, expected: str) -> None:
    assert handle_amount(text) == expected


def test_handle_amount_only_inverts_plain_values() -> None:
    assert handle_amount("-5") == "5.00"
    assert handle_amount("10+-20") == "-10.00"
    assert handle_amount("-2*3") == "-6.00"


@pytest.mark.parametrize(
    "text",
    [
        "5 USD EXTRA",
        "5  USD",
        "",
        "abc",
        "inf",
        "nan",
        "1_000",
        "2*3*4",
        "2*",
        "10+ USD",
        "10+",
        "10+abc",
        "1e308",
        "-1e308",
        "1e200*1e200",
        "1e308+1e308",
    ],
)
def test_handle_amount_rejects_malformed_input(text: str) -> None:
    with pytest.raises(FormatError):
        handle_amount(text)


def test_handle_amount_names_offending_piece() -> None:
    with pytest.raises(FormatError, match="'abc'"):
        handle_amount("10+abc")
    with pytest.raises(FormatError, match="exactly two"):
        handle_amount("2*3*4")
    with pytest.raises(FormatError, match="too many spaces"):
        handle_amount("5 USD EXTRA")
    with pytest.raises(FormatError, match="out of range"):
        handle_amount("1e200*1e200")


def test_parse_amount_precision() -> None:
    assert parse_amount(17.34) == "17.34"
    assert parse_amount(17.0) == "17.00"
    assert parse_amount(0.001) == "0.001"
    assert parse_amount(1234.5678) == "1234.5678"


def test_parse_amount_strips_zeros_after_default_precision() -> None:
    # Six-digit default precision rounds this to "10.000000" before stripping.
    assert parse_amount(10.0000001) == "10."


@pytest.mark.parametrize(
    ("value", "expected"),
    [(0, 1), (9.99, 1), (10, 2), (17.34, 2), (999.5, 3), (1000, 4), (-5, 1)],
)
def test_count_leading_digits(value: float, expected: int) -> None:
    assert count_leading_digits(value) == expected


def test_parse_date_checks_pattern_only() -> None:
    assert parse_date("2023-01-15") == "2023-01-15"
    assert parse_date("2023-13-45") == "2023-13-45"
    for bad in ("not-a-date", "2023-1-15", "15.01.2023", ""):
        with pytest.raises(FormatError):
            parse_date(bad)


def test_handle_date_accepts_today() -> None:
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", handle_date("today"))
    assert handle_date(" 2024-02-29 ") == "2024-02-29"


def test_handle_raw_is_passthrough() -> None:
    assert handle_raw(" Assets:Wallet ") == " Assets:Wallet "


def test_parse_date_keeps_surrounding_characters() -> None:
    assert parse_date("2023-01-15x") == "2023-01-15x"
    assert parse_date("x2023-01-15") == "x2023-01-15"
