"""Ledger package.

Public API:
- compute_summary: average-cost ledger walk producing a LedgerSummary for a month.
- Ledger: the per-call state (holdings, cash, purchased, sold, realized PnL).
"""

from .ledger import Ledger, compute_summary, iter_window  # re-export
from .model import (
    AnnotatedTransaction,
    HoldingPosition,
    InsufficientShares,
    LedgerSummary,
    MonthTotals,
    ProfitResult,
    RealizedProfit,
    Transaction,
)
