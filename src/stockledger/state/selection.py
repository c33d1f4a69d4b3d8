"""Persisted month selection.

The host keeps the last selected month in a single-row SQLite key-value
table so the next run defaults to it. The ledger itself never reads this;
callers resolve a month here and pass it in explicitly.
"""
from __future__ import annotations

import logging
import os
import sqlite3
from typing import Mapping, Optional, Sequence

from stockledger.errors import DatasetError, UnknownMonthError

logger = logging.getLogger(__name__)

SELECTED_MONTH_KEY = "selected_month"

DDL = """
CREATE TABLE IF NOT EXISTS settings (
  key TEXT PRIMARY KEY,
  value TEXT NOT NULL
);
"""


class SelectionStore:
    def __init__(self, path: str = "data/state.sqlite"):
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        self.path = path
        with sqlite3.connect(self.path) as con:
            con.execute(DDL)

    def get(self, default: Optional[str] = None) -> Optional[str]:
        with sqlite3.connect(self.path) as con:
            row = con.execute(
                "SELECT value FROM settings WHERE key = ?", (SELECTED_MONTH_KEY,)
            ).fetchone()
        if row is None:
            return default
        return str(row[0])

    def set(self, month: str) -> None:
        with sqlite3.connect(self.path) as con:
            con.execute(
                "INSERT INTO settings (key, value) VALUES (?, ?)"
                " ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (SELECTED_MONTH_KEY, month),
            )


def resolve_month(
    requested: Optional[str],
    stored: Optional[str],
    monthly_data: Mapping[str, Sequence[object]],
    default: str = "January",
) -> str:
    """Pick the month to summarize.

    Order: explicit request (must exist), stored selection still present in
    the data, `default` if present, then the first month.
    """
    if not monthly_data:
        raise DatasetError("Dataset has no months")
    if requested is not None:
        if requested not in monthly_data:
            raise UnknownMonthError(requested)
        return requested
    if stored is not None:
        if stored in monthly_data:
            return stored
        logger.warning(f"Stored month {stored!r} not in dataset; falling back to {default!r}")
    if default in monthly_data:
        return default
    return next(iter(monthly_data))
