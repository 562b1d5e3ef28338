"""Centralized exception definitions."""

from __future__ import annotations


class AppError(Exception):
    """Base domain/application error."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class FormatError(AppError):
    """Raised when user input does not match the expected field format."""


class TransactionStateError(AppError):
    """Raised when a transaction is driven outside of its lifecycle."""


class IncompleteTransactionError(TransactionStateError):
    """Raised when rendering is requested before every step was answered."""

    def __init__(self, message: str = "not all data for this tx has been gathered") -> None:
        super().__init__(message)


class HintLookupError(AppError):
    """Raised when the history source cannot serve suggestions."""
