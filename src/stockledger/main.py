"""
Main entrypoint for stockledger.

What it does:
- Loads runtime settings from `config/config.yaml` plus environment overrides.
- Loads the monthly transaction dataset and resolves the month to summarize
  (explicit `--month`, else the persisted selection, else the default month).
- Computes the ledger summary, records Prometheus metrics, prints the summary
  and the month's transactions, and optionally writes the HTML report.
- Persists the resolved month so the next run defaults to it.

Where it is used:
- Invoked by `python -m stockledger.main` or the `stockledger` console script.

Key related modules:
- `stockledger.config.loader.Settings` and `load_settings`
- `stockledger.data.transactions.load_monthly_data`
- `stockledger.ledger.compute_summary`
"""
import argparse
import logging
import sqlite3
from typing import Optional, Sequence

import yaml
from pydantic import ValidationError

from stockledger.config.loader import load_settings
from stockledger.data.transactions import load_monthly_data, months
from stockledger.errors import StockLedgerError
from stockledger.ledger import compute_summary
from stockledger.metrics.ledger import record_summary
from stockledger.reports.generate import write_report
from stockledger.reports.table import summary_lines, transactions_frame
from stockledger.state.selection import SelectionStore, resolve_month


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="stockledger", description="Monthly stock ledger summary")
    parser.add_argument("--config", default="config/config.yaml", help="Path to the YAML config")
    parser.add_argument("--month", default=None, help="Month to summarize (defaults to last selection)")
    parser.add_argument("--report", action="store_true", help="Write the HTML report")
    parser.add_argument("--list-months", action="store_true", help="Print the dataset months and exit")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    args = _build_parser().parse_args(argv)

    try:
        settings = load_settings(args.config)
        monthly_data = load_monthly_data(settings.data_path)
        if args.list_months:
            for name in months(monthly_data):
                print(name)
            return 0
        store = SelectionStore(settings.state_path)
        month = resolve_month(args.month, store.get(), monthly_data, settings.default_month)
        summary = compute_summary(monthly_data, month)
        store.set(month)
    except (StockLedgerError, ValidationError, yaml.YAMLError, sqlite3.Error, OSError) as e:
        logging.error(f"Cannot summarize ledger: {e}")
        return 2

    logging.info(f"Selected month: {month}")
    record_summary(summary)

    for line in summary_lines(summary):
        print(line)
    frame = transactions_frame(summary)
    if frame.empty:
        print("(no transactions)")
    else:
        print(frame.to_string(index=False))

    if args.report:
        out_html = write_report(
            summary,
            settings.report.out_dir,
            chart_width=settings.report.chart_width,
            chart_height=settings.report.chart_height,
        )
        print(f"Report written to: {out_html}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
