from prometheus_client import REGISTRY

from stockledger.main import main


def _write_fixture(tmp_path):
    data = tmp_path / "tx.yaml"
    data.write_text(
        "January:\n"
        "  - {date: '2024-01-01', symbol: X, type: BUY, quantity: 10, price: 5}\n"
        "February:\n"
        "  - {date: '2024-02-01', symbol: X, type: SELL, quantity: 4, price: 8}\n"
    )
    cfg = tmp_path / "config.yaml"
    cfg.write_text(
        f"data_path: {data}\n"
        f"state_path: {tmp_path / 'state.sqlite'}\n"
        "report:\n"
        f"  out_dir: {tmp_path / 'reports'}\n"
    )
    return cfg


def _clear_env(monkeypatch):
    for name in ("STOCKLEDGER_DATA_PATH", "STOCKLEDGER_STATE_PATH", "STOCKLEDGER_DEFAULT_MONTH", "REPORT_DIR"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("DISABLE_PROMETHEUS", raising=False)


def test_main_defaults_then_remembers_selection(tmp_path, monkeypatch, capsys):
    _clear_env(monkeypatch)
    cfg = _write_fixture(tmp_path)

    assert main(["--config", str(cfg)]) == 0
    out = capsys.readouterr().out
    assert "Summary for January" in out

    assert main(["--config", str(cfg), "--month", "February", "--report"]) == 0
    out = capsys.readouterr().out
    assert "Profit/Loss: $12.00" in out
    assert "Report written to:" in out
    assert (tmp_path / "reports" / "index.html").exists()

    assert main(["--config", str(cfg)]) == 0
    assert "Summary for February" in capsys.readouterr().out


def test_main_unknown_month_exits_2(tmp_path, monkeypatch):
    _clear_env(monkeypatch)
    cfg = _write_fixture(tmp_path)
    assert main(["--config", str(cfg), "--month", "Smarch"]) == 2


def test_main_list_months(tmp_path, monkeypatch, capsys):
    _clear_env(monkeypatch)
    cfg = _write_fixture(tmp_path)
    assert main(["--config", str(cfg), "--list-months"]) == 0
    assert capsys.readouterr().out.split() == ["January", "February"]


def test_main_invalid_config_exits_2(tmp_path, monkeypatch):
    _clear_env(monkeypatch)
    cfg = tmp_path / "config.yaml"
    cfg.write_text("report:\n  chart_height: 0\n")
    assert main(["--config", str(cfg)]) == 2


def test_main_unopenable_state_path_exits_2(tmp_path, monkeypatch):
    _clear_env(monkeypatch)
    cfg = _write_fixture(tmp_path)
    state_dir = tmp_path / "state_is_a_dir"
    state_dir.mkdir()
    monkeypatch.setenv("STOCKLEDGER_STATE_PATH", str(state_dir))
    assert main(["--config", str(cfg)]) == 2


def test_main_records_metrics(tmp_path, monkeypatch):
    _clear_env(monkeypatch)
    data = tmp_path / "tx.yaml"
    data.write_text("CliMetricsMonth:\n  - {date: d, symbol: X, type: BUY, quantity: 2, price: 3}\n")
    cfg = tmp_path / "config.yaml"
    cfg.write_text(f"data_path: {data}\nstate_path: {tmp_path / 'state.sqlite'}\n")
    before = REGISTRY.get_sample_value("ledger_summaries_total", {"month": "CliMetricsMonth"}) or 0.0
    assert main(["--config", str(cfg)]) == 0
    assert REGISTRY.get_sample_value("ledger_summaries_total", {"month": "CliMetricsMonth"}) == before + 1
    assert REGISTRY.get_sample_value("ledger_cash_delta", {"month": "CliMetricsMonth"}) == -6.0
