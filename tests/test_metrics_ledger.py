from prometheus_client import REGISTRY

from stockledger.ledger import Transaction, compute_summary
from stockledger.metrics import ledger as metrics_ledger
from stockledger.metrics.ledger import get_summaries_total, record_summary


def _sample(metric: str, labels: dict) -> float:
    val = REGISTRY.get_sample_value(metric, labels)
    return 0.0 if val is None else float(val)


def test_record_summary_sets_gauges_and_counters():
    data = {
        "MetricsMonth": [
            Transaction(date="d1", symbol="MTX", type="BUY", quantity=10, price=5.0),
            Transaction(date="d2", symbol="MTX", type="SELL", quantity=4, price=8.0),
            Transaction(date="d3", symbol="MTY", type="SELL", quantity=1, price=8.0),
        ]
    }
    before_runs = _sample("ledger_summaries_total", {"month": "MetricsMonth"})
    before_bad = _sample("ledger_insufficient_shares_total", {"symbol": "MTY"})
    record_summary(compute_summary(data, "MetricsMonth"))
    assert _sample("ledger_summaries_total", {"month": "MetricsMonth"}) == before_runs + 1
    assert _sample("ledger_insufficient_shares_total", {"symbol": "MTY"}) == before_bad + 1
    assert _sample("ledger_profit_loss", {"month": "MetricsMonth"}) == 12.0
    assert _sample("ledger_cash_delta", {"month": "MetricsMonth"}) == -18.0


def test_collector_getter_is_cached():
    assert get_summaries_total() is get_summaries_total()


def test_disabled_metrics_do_not_stick_after_reenable(monkeypatch):
    for name in ("_summaries_total", "_insufficient_shares_total", "_profit_loss_gauge", "_cash_delta_gauge"):
        monkeypatch.setattr(metrics_ledger, name, None)
    monkeypatch.setenv("DISABLE_PROMETHEUS", "1")
    disabled = Transaction(date="d1", symbol="MTD", type="BUY", quantity=1, price=2.0)
    record_summary(compute_summary({"DisabledMonth": [disabled]}, "DisabledMonth"))
    assert REGISTRY.get_sample_value("ledger_summaries_total", {"month": "DisabledMonth"}) is None

    monkeypatch.delenv("DISABLE_PROMETHEUS")
    before = _sample("ledger_summaries_total", {"month": "ReenabledMonth"})
    record_summary(compute_summary({"ReenabledMonth": [disabled]}, "ReenabledMonth"))
    assert _sample("ledger_summaries_total", {"month": "ReenabledMonth"}) == before + 1
    assert _sample("ledger_cash_delta", {"month": "ReenabledMonth"}) == -2.0
