from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional, Union

TxnType = Literal["BUY", "SELL"]

INSUFFICIENT_SHARES_MESSAGE = "Error: Insufficient Shares"


@dataclass(frozen=True)
class Transaction:
    date: str
    symbol: str
    type: TxnType
    quantity: float
    price: float

    def notional(self) -> float:
        return self.quantity * self.price


@dataclass
class HoldingPosition:
    quantity: float = 0.0
    total_cost: float = 0.0

    def avg_cost(self) -> float:
        """Running average cost per unit; requires quantity > 0."""
        return self.total_cost / self.quantity


@dataclass(frozen=True)
class RealizedProfit:
    value: float
    kind: Literal["ok"] = "ok"


@dataclass(frozen=True)
class InsufficientShares:
    symbol: str
    requested: float
    held: float
    kind: Literal["insufficient_shares"] = "insufficient_shares"

    @property
    def message(self) -> str:
        return INSUFFICIENT_SHARES_MESSAGE


ProfitResult = Union[RealizedProfit, InsufficientShares]


@dataclass(frozen=True)
class AnnotatedTransaction:
    transaction: Transaction
    profit: Optional[ProfitResult] = None


@dataclass(frozen=True)
class MonthTotals:
    """Per-month unit quantities bought and sold (not cumulative)."""

    month: str
    purchased: float
    sold: float


@dataclass
class LedgerSummary:
    month: str
    holdings: Dict[str, HoldingPosition] = field(default_factory=dict)
    cash_delta: float = 0.0
    amount_purchased: float = 0.0
    amount_sold: float = 0.0
    profit_loss: float = 0.0
    remaining_in_shares: float = 0.0
    annotated_transactions: List[AnnotatedTransaction] = field(default_factory=list)
    monthly_series: List[MonthTotals] = field(default_factory=list)
