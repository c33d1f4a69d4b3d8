from __future__ import annotations

from collections import deque
from typing import Deque, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from ..errors import UnknownMonthError
from ..logs.ledger_log import log_ledger_event
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

MonthlyData = Mapping[str, Sequence[Transaction]]


class Ledger:
    """Average-cost ledger state threaded through one summary computation."""

    def __init__(self) -> None:
        self.holdings: Dict[str, HoldingPosition] = {}
        self.cash = 0.0
        self.purchased = 0.0
        self.sold = 0.0
        self.profit_loss = 0.0

    def apply(self, txn: Transaction) -> Optional[ProfitResult]:
        """Apply one transaction; return its profit result (None for a BUY).

        A SELL exceeding the held quantity is returned as InsufficientShares
        and leaves every total and the position untouched.
        """
        if txn.type == "BUY":
            pos = self.holdings.setdefault(txn.symbol, HoldingPosition())
            pos.quantity += txn.quantity
            pos.total_cost += txn.quantity * txn.price
            self.cash -= txn.quantity * txn.price
            self.purchased += txn.quantity * txn.price
            return None
        if txn.type == "SELL":
            pos = self.holdings.get(txn.symbol)
            if pos is None or pos.quantity < txn.quantity:
                held = pos.quantity if pos is not None else 0.0
                return InsufficientShares(symbol=txn.symbol, requested=txn.quantity, held=held)
            # Average is recomputed from current totals on every sell
            avg_cost = pos.avg_cost()
            profit = txn.quantity * (txn.price - avg_cost)
            pos.quantity -= txn.quantity
            pos.total_cost -= txn.quantity * avg_cost
            self.cash += txn.quantity * txn.price
            self.sold += txn.quantity * txn.price
            self.profit_loss += profit
            return RealizedProfit(profit)
        raise ValueError(f"Unsupported transaction type: {txn.type!r}")

    def open_positions(self) -> Dict[str, HoldingPosition]:
        return {sym: pos for sym, pos in self.holdings.items() if pos.quantity != 0}


def iter_window(monthly_data: MonthlyData, selected_month: str) -> Iterator[Tuple[str, Sequence[Transaction]]]:
    """Yield (month, transactions) from the first month through `selected_month`."""
    for month, txns in monthly_data.items():
        yield month, txns
        if month == selected_month:
            return


def _annotate(
    transactions: Sequence[Transaction],
    results: Dict[Tuple[str, str], List[ProfitResult]],
) -> List[AnnotatedTransaction]:
    # Repeated (date, symbol) pairs are matched in order of appearance
    queues: Dict[Tuple[str, str], Deque[ProfitResult]] = {k: deque(v) for k, v in results.items()}
    annotated: List[AnnotatedTransaction] = []
    for txn in transactions:
        profit: Optional[ProfitResult] = None
        if txn.type == "SELL":
            queue = queues.get((txn.date, txn.symbol))
            if queue:
                profit = queue.popleft()
        annotated.append(AnnotatedTransaction(transaction=txn, profit=profit))
    return annotated


def compute_summary(monthly_data: MonthlyData, selected_month: str) -> LedgerSummary:
    """Walk every month up to and including `selected_month` and summarize.

    Raises UnknownMonthError when `selected_month` is not in `monthly_data`.
    Transactions must have finite, positive quantity and price, as the
    dataset loader enforces; a zero-quantity SELL against a closed position
    would divide by zero when computing the average cost.
    """
    if selected_month not in monthly_data:
        raise UnknownMonthError(selected_month)

    ledger = Ledger()
    series: List[MonthTotals] = []
    selected_results: Dict[Tuple[str, str], List[ProfitResult]] = {}
    remaining_in_shares = 0.0

    for month, txns in iter_window(monthly_data, selected_month):
        month_purchased = 0.0
        month_sold = 0.0
        for txn in txns:
            result = ledger.apply(txn)
            if txn.type == "BUY":
                month_purchased += txn.quantity
            elif isinstance(result, RealizedProfit):
                month_sold += txn.quantity
            elif isinstance(result, InsufficientShares):
                log_ledger_event(
                    "insufficient_shares",
                    month,
                    txn.symbol,
                    date=txn.date,
                    extra={"requested": txn.quantity, "held": result.held},
                )
            if month == selected_month and result is not None:
                selected_results.setdefault((txn.date, txn.symbol), []).append(result)
        series.append(MonthTotals(month=month, purchased=month_purchased, sold=month_sold))
        remaining_in_shares = ledger.purchased - ledger.sold

    return LedgerSummary(
        month=selected_month,
        holdings=ledger.open_positions(),
        cash_delta=ledger.cash,
        amount_purchased=ledger.purchased,
        amount_sold=ledger.sold,
        profit_loss=ledger.profit_loss,
        remaining_in_shares=remaining_in_shares,
        annotated_transactions=_annotate(monthly_data[selected_month], selected_results),
        monthly_series=series,
    )
