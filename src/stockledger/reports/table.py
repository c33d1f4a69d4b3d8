"""
Tabular and text rendering of a LedgerSummary.

All rounding to 2 decimals happens here; the ledger keeps raw floats.
"""

from __future__ import annotations

from typing import Dict, List, Optional

import pandas as pd

from stockledger.ledger.model import (
    HoldingPosition,
    InsufficientShares,
    LedgerSummary,
    ProfitResult,
    RealizedProfit,
)

COLUMNS = [
    "Date", "Symbol", "Type", "Quantity",
    "Purchase Price", "Selling Price", "Total", "Profit/Loss",
]


def format_currency(value: float) -> str:
    if value < 0:
        return f"-${abs(value):,.2f}"
    return f"${value:,.2f}"


def format_quantity(value: float) -> str:
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_holdings(holdings: Dict[str, HoldingPosition]) -> str:
    return ", ".join(f"{sym}: {format_quantity(pos.quantity)}" for sym, pos in holdings.items())


def format_profit(profit: Optional[ProfitResult]) -> str:
    if isinstance(profit, RealizedProfit):
        return format_currency(profit.value)
    if isinstance(profit, InsufficientShares):
        return profit.message
    return "-"


def transactions_frame(summary: LedgerSummary) -> pd.DataFrame:
    """One display row per transaction of the selected month."""
    rows = []
    for at in summary.annotated_transactions:
        t = at.transaction
        rows.append({
            "Date": t.date,
            "Symbol": t.symbol,
            "Type": t.type,
            "Quantity": format_quantity(t.quantity),
            "Purchase Price": format_currency(t.price) if t.type == "BUY" else "-",
            "Selling Price": format_currency(t.price) if t.type == "SELL" else "-",
            "Total": format_currency(t.notional()),
            "Profit/Loss": format_profit(at.profit),
        })
    return pd.DataFrame(rows, columns=COLUMNS)


def summary_lines(summary: LedgerSummary) -> List[str]:
    return [
        f"Summary for {summary.month}",
        f"Amount Purchased: {format_currency(summary.amount_purchased)}",
        f"Amount Sold: {format_currency(summary.amount_sold)}",
        f"Profit/Loss: {format_currency(summary.profit_loss)}",
        f"Amount Remaining in Shares: {format_currency(summary.remaining_in_shares)}",
        f"Shares Remaining: {format_holdings(summary.holdings)}",
    ]
