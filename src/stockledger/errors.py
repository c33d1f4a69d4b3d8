"""Exception types shared across stockledger."""

from __future__ import annotations


class StockLedgerError(Exception):
    """Base class for stockledger errors."""


class DatasetError(StockLedgerError, ValueError):
    """The transaction dataset is empty or contains an invalid record."""


class UnknownMonthError(StockLedgerError, KeyError):
    """The requested month is not a key of the dataset."""

    def __init__(self, month: str):
        super().__init__(month)
        self.month = month

    def __str__(self) -> str:
        return f"Unknown month: {self.month!r}"
