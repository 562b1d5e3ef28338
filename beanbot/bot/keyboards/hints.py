"""Reply keyboards built from step hints."""

from __future__ import annotations

from typing import Sequence, Union

from aiogram.types import KeyboardButton, ReplyKeyboardMarkup, ReplyKeyboardRemove


def hint_keyboard(options: Sequence[str]) -> Union[ReplyKeyboardMarkup, ReplyKeyboardRemove]:
    """One suggestion per row; no suggestions removes the keyboard."""

    if not options:
        return ReplyKeyboardRemove()
    return ReplyKeyboardMarkup(
        keyboard=[[KeyboardButton(text=option)] for option in options],
        resize_keyboard=True,
        one_time_keyboard=True,
    )
