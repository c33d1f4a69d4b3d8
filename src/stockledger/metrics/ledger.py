from __future__ import annotations

from typing import Optional
import os
from prometheus_client import Counter, Gauge, REGISTRY

from ..ledger.model import InsufficientShares, LedgerSummary

_summaries_total: Optional[Counter] = None
_insufficient_shares_total: Optional[Counter] = None
_profit_loss_gauge: Optional[Gauge] = None
_cash_delta_gauge: Optional[Gauge] = None


class _NoOp:
    def labels(self, *args, **kwargs):
        return self
    def inc(self, *args, **kwargs):
        return None
    def set(self, *args, **kwargs):
        return None


def _existing_collector(name: str):
    try:
        coll = getattr(REGISTRY, "_names_to_collectors", {}).get(name)
        if coll is not None:
            return coll
        for coll in list(getattr(REGISTRY, "_collector_to_names", {}).keys()):  # type: ignore[attr-defined]
            if getattr(coll, "_name", None) == name:
                return coll
    except Exception:
        pass
    return None


def _safe_counter(name: str, doc: str, labelnames):
    if os.getenv("DISABLE_PROMETHEUS", "0") == "1":
        return _NoOp()
    try:
        return Counter(name, doc, labelnames)
    except ValueError:
        return _existing_collector(name) or _NoOp()


def _safe_gauge_labels(name: str, doc: str, labelnames):
    if os.getenv("DISABLE_PROMETHEUS", "0") == "1":
        return _NoOp()
    try:
        return Gauge(name, doc, labelnames)
    except ValueError:
        return _existing_collector(name) or _NoOp()


# Getters retry a cached _NoOp so re-enabling metrics takes effect
def get_summaries_total():
    global _summaries_total
    if _summaries_total is None or isinstance(_summaries_total, _NoOp):
        _summaries_total = _safe_counter("ledger_summaries_total", "Ledger summaries computed", ["month"])
    return _summaries_total


def get_insufficient_shares_total():
    """Counter: sells rejected for insufficient shares, labeled by symbol."""
    global _insufficient_shares_total
    if _insufficient_shares_total is None or isinstance(_insufficient_shares_total, _NoOp):
        _insufficient_shares_total = _safe_counter(
            "ledger_insufficient_shares_total", "Sells rejected for insufficient shares", ["symbol"]
        )
    return _insufficient_shares_total


def get_profit_loss_gauge():
    global _profit_loss_gauge
    if _profit_loss_gauge is None or isinstance(_profit_loss_gauge, _NoOp):
        _profit_loss_gauge = _safe_gauge_labels("ledger_profit_loss", "Cumulative realized profit/loss", ["month"])
    return _profit_loss_gauge


def get_cash_delta_gauge():
    global _cash_delta_gauge
    if _cash_delta_gauge is None or isinstance(_cash_delta_gauge, _NoOp):
        _cash_delta_gauge = _safe_gauge_labels("ledger_cash_delta", "Cumulative net cash effect", ["month"])
    return _cash_delta_gauge


def record_summary(summary: LedgerSummary) -> None:
    """Update ledger metrics from a computed summary.

    Only the selected month's rejected sells are counted, so re-summarizing a
    month counts them again.
    """
    try:
        get_summaries_total().labels(summary.month).inc()
        get_profit_loss_gauge().labels(summary.month).set(summary.profit_loss)
        get_cash_delta_gauge().labels(summary.month).set(summary.cash_delta)
        rejected = get_insufficient_shares_total()
        for at in summary.annotated_transactions:
            if isinstance(at.profit, InsufficientShares):
                rejected.labels(at.transaction.symbol).inc()
    except Exception:
        # Metrics are optional in constrained environments
        pass
