"""
Static transaction dataset loader.

What it does:
- Reads a YAML (or JSON) file shaped as `{month: [transaction, ...], ...}`.
- Validates each record with Pydantic and converts it to a `Transaction`.
- Preserves month order and in-month transaction order exactly as written;
  both are significant for the average-cost ledger walk.

Where it is used:
- Called by `stockledger.main` to build the monthly dataset passed to
  `stockledger.ledger.compute_summary`.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from stockledger.errors import DatasetError
from stockledger.ledger.model import Transaction

logger = logging.getLogger(__name__)


class TransactionRecord(BaseModel):
    """One raw trade record as written in the dataset file."""
    date: str
    symbol: str
    type: str
    quantity: float
    price: float

    @field_validator("date", "symbol", mode="before")
    @classmethod
    def not_empty(cls, v, info):
        v = str(v).strip() if v is not None else ""
        if not v:
            raise ValueError(f"{info.field_name} must not be empty")
        return v

    @field_validator("type")
    @classmethod
    def known_type(cls, v):
        v = v.strip().upper()
        if v not in ("BUY", "SELL"):
            raise ValueError(f"type must be BUY or SELL, got {v!r}")
        return v

    @field_validator("quantity", "price")
    @classmethod
    def positive(cls, v, info):
        if not math.isfinite(v) or v <= 0:
            raise ValueError(f"{info.field_name} must be a finite positive number")
        return v

    def to_transaction(self) -> Transaction:
        return Transaction(
            date=self.date,
            symbol=self.symbol,
            type=self.type,  # type: ignore[arg-type]
            quantity=self.quantity,
            price=self.price,
        )


def parse_monthly_data(raw: Any) -> Dict[str, List[Transaction]]:
    """Validate an already-parsed `{month: [record, ...]}` mapping."""
    if not isinstance(raw, dict):
        raise DatasetError("Dataset must be a mapping of month name to transaction list")
    monthly: Dict[str, List[Transaction]] = {}
    for month, records in raw.items():
        if records is None:
            records = []
        if not isinstance(records, list):
            raise DatasetError(f"Month {month!r} must hold a list of transactions")
        txns: List[Transaction] = []
        for idx, rec in enumerate(records):
            try:
                txns.append(TransactionRecord.model_validate(rec).to_transaction())
            except ValidationError as e:
                raise DatasetError(f"Invalid transaction {month}[{idx}]: {e}") from e
        monthly[str(month)] = txns
    return monthly


def load_monthly_data(path: str) -> Dict[str, List[Transaction]]:
    """Load and validate the dataset file at `path`."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise DatasetError(f"Cannot parse dataset {path}: {e}") from e
    monthly = parse_monthly_data(raw or {})
    logger.info(
        "Loaded %d transactions across %d months from %s",
        sum(len(t) for t in monthly.values()),
        len(monthly),
        path,
    )
    return monthly


def months(monthly_data: Dict[str, List[Transaction]]) -> List[str]:
    return list(monthly_data.keys())
