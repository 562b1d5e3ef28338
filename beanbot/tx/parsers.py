"""Field parsers turning raw message text into canonical transaction values."""

from __future__ import annotations

import math
import re
from datetime import datetime, timezone

from beanbot.errors import FormatError
from beanbot.logging_setup import get_logger

logger = get_logger(__name__)

BEANCOUNT_DATE_FORMAT = "%Y-%m-%d"
DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")

# Sub-cent remainders below this are float noise, not real digits.
CENT_TOLERANCE = 1e-12


def _parse_number(piece: str) -> float:
    if piece != piece.strip() or "_" in piece:
        raise ValueError(f"invalid number: {piece!r}")
    value = float(piece)
    if not math.isfinite(value):
        raise ValueError(f"number is not finite: {piece!r}")
    return value


def _checked(value: float) -> float:
    if not (math.isfinite(value) and math.isfinite(value * 100)):
        raise FormatError(f"amount is out of range: {value}")
    return value


def _apply_operator(value: str, operator: str, op_name: str) -> list[float]:
    operands = []
    for piece in value.split(operator):
        try:
            operands.append(_parse_number(piece))
        except ValueError as exc:
            raise FormatError(
                f"tried to {op_name} values due to '{operator}' operator found, failed at value '{piece}': {exc}"
            ) from exc
    return operands


def handle_amount(text: str) -> str:
    """Parse an amount with optional currency and ``+``/``*`` shorthand.

    Returns the canonical amount string, e.g. ``"17.34"`` or ``"5.00 USD"``.
    """

    cleaned = text.strip().replace(",", ".")
    parts = cleaned.split(" ")
    if len(parts) > 2:
        raise FormatError(
            f"input '{cleaned}' contained too many spaces. It should only contain the value and an optional currency"
        )
    value = parts[0]
    currency = f" {parts[1]}" if len(parts) == 2 else ""

    if "+" in value:
        # A trailing '+' keeps the amount open for later additions.
        if value.endswith("+") and currency:
            raise FormatError(
                "for transactions being kept open with trailing '+' operator, no additionally specified currency is allowed"
            )
        return parse_amount(_checked(sum(_apply_operator(value, "+", "sum up")))) + currency

    if "*" in value:
        factors = value.split("*")
        if len(factors) != 2:
            raise FormatError("expected exactly two multiplicators ('a*b')")
        left, right = _apply_operator(value, "*", "multiply")
        return parse_amount(_checked(left * right)) + currency

    try:
        number = _parse_number(value)
    except ValueError as exc:
        raise FormatError(f"could not parse amount '{value}': {exc}") from exc
    if number < 0:
        logger.info("Got negative value. Inverting.")
        number *= -1
    logger.debug("Handled amount: %r -> %f", text, number)
    return parse_amount(_checked(number)) + currency


def handle_raw(text: str) -> str:
    """Accept free text as-is (accounts, descriptions)."""

    return text


def parse_date(text: str) -> str:
    """Check ``text`` contains a ``YYYY-MM-DD`` literal; no calendar validation is done.

    The text is returned as given, surrounding characters included.
    """

    if not DATE_PATTERN.search(text):
        raise FormatError("Input did not match pattern 'YYYY-MM-DD'")
    return text


def handle_date(text: str) -> str:
    """Parser for a date step: a ``YYYY-MM-DD`` literal or ``today``."""

    cleaned = text.strip()
    if cleaned.lower() == "today":
        return datetime.now(timezone.utc).strftime(BEANCOUNT_DATE_FORMAT)
    return parse_date(cleaned)


def parse_amount(value: float) -> str:
    """Render an amount with two decimals, or full precision for sub-cent values.

    Full precision output has trailing zero characters stripped.
    """

    if abs(math.remainder(value * 100, 1.0)) >= CENT_TOLERANCE:
        return f"{value:f}".rstrip("0")
    return f"{value:.2f}"


def count_leading_digits(value: float) -> int:
    """Number of digits before the decimal point (at least one)."""

    count = 1
    while value >= 10:
        value /= 10
        count += 1
    return count
