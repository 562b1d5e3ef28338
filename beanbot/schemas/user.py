"""User preference schemas."""

from __future__ import annotations

import re

from pydantic import BaseModel, Field, field_validator

# beancount commodity names: capitals, digits and ' . _ - inside.
CURRENCY_PATTERN = re.compile(r"[A-Z][A-Z0-9'._-]{0,22}[A-Z0-9]|[A-Z]")


class UserPreferences(BaseModel):
    """Formatting preferences applied when a transaction is rendered."""

    model_config = {"from_attributes": True}

    currency: str = Field(min_length=1, max_length=24)
    tag: str = Field(default="", max_length=64)
    tz_offset: int = Field(default=0, ge=-12, le=14)

    @field_validator("currency")
    @classmethod
    def normalize_currency(cls, value: str) -> str:
        normalized = value.strip().upper()
        if not CURRENCY_PATTERN.fullmatch(normalized):
            raise ValueError("currency must be a beancount commodity such as EUR or USD")
        return normalized

    @field_validator("tag")
    @classmethod
    def normalize_tag(cls, value: str) -> str:
        normalized = value.strip().lstrip("#")
        if any(ch.isspace() for ch in normalized):
            raise ValueError("tag must not contain whitespace")
        return normalized
