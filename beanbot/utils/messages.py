"""Helpers for splitting bot output into Telegram-sized messages."""

from __future__ import annotations

from typing import Iterable

TELEGRAM_MAX_MESSAGE_LENGTH = 4096


def chunk_records(records: Iterable[str], max_length: int = TELEGRAM_MAX_MESSAGE_LENGTH) -> list[str]:
    """Join records (one per line block) into as few messages as possible.

    A record is never split across messages; a single record longer than
    ``max_length`` gets a message of its own.
    """

    messages: list[str] = []
    current = ""
    for record in records:
        block = record + "\n"
        if current and len(current) + len(block) > max_length:
            messages.append(current)
            current = ""
        current += block
    if current:
        messages.append(current)
    return messages


def strip_command(text: str) -> str:
    """Text after the leading ``/command`` token."""

    parts = text.strip().split(maxsplit=1)
    return parts[1].strip() if len(parts) == 2 else ""
