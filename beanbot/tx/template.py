"""Rendering of a completed transaction into a beancount text block."""

from __future__ import annotations

from beanbot.errors import FormatError
from beanbot.tx.parsers import count_leading_digits, parse_amount

DOT_INDENT = 47

TX_TEMPLATE = '{date} * "{description}"{tag}\n  {account_from}{padding} -{amount} {currency}\n  {account_to}\n'


def split_amount(raw_amount: str) -> tuple[float, str | None]:
    """Split a captured amount like ``"5.00 USD"`` into number and optional currency."""

    parts = raw_amount.split(" ")
    currency = parts[1] if len(parts) >= 2 else None
    try:
        return float(parts[0]), currency
    except ValueError as exc:
        raise FormatError(f"captured amount '{raw_amount}' is not a number") from exc


def from_padding(account_from: str, amount: float, dot_indent: int = DOT_INDENT) -> str:
    """Spaces placing the amount's decimal point at ``dot_indent``."""

    # Minus one for the template's separating space and one for the sign.
    needed = dot_indent - len(account_from) - count_leading_digits(amount) - 2
    return " " * max(needed, 0)


def render_simple_tx(
    *,
    date: str,
    description: str,
    account_from: str,
    account_to: str,
    raw_amount: str,
    currency: str,
    tag: str = "",
    dot_indent: int = DOT_INDENT,
) -> str:
    """Fill the two-posting template.

    A currency captured together with the amount wins over ``currency``.
    """

    amount, amount_currency = split_amount(raw_amount)
    return TX_TEMPLATE.format(
        date=date,
        description=description,
        tag=f" #{tag}" if tag else "",
        account_from=account_from,
        padding=from_padding(account_from, amount, dot_indent),
        amount=parse_amount(amount),
        currency=amount_currency or currency,
        account_to=account_to,
    )
