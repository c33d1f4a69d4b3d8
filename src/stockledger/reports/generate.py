"""
Generate an HTML report for one month's ledger summary.

Writes `index.html`, `transactions.csv` and `images/monthly.png` under the
output directory.

Usage (venv):
  PYTHONPATH=src python -m stockledger.main --report
"""

from __future__ import annotations

import os
from datetime import datetime, timezone

from jinja2 import Environment, FileSystemLoader, select_autoescape

from stockledger.ledger.model import LedgerSummary
from stockledger.reports.charts import save_monthly_bar_png
from stockledger.reports.table import (
    format_currency,
    format_holdings,
    transactions_frame,
)


def _template_env(template_dir: str) -> Environment:
    return Environment(
        loader=FileSystemLoader(template_dir),
        autoescape=select_autoescape(["html", "xml"]),
    )


def write_report(
    summary: LedgerSummary,
    out_dir: str = "reports",
    chart_width: float = 8.0,
    chart_height: float = 4.0,
) -> str:
    """Render the report for `summary` into `out_dir`; return the HTML path."""
    img_dir = os.path.join(out_dir, "images")
    os.makedirs(img_dir, exist_ok=True)

    chart = save_monthly_bar_png(
        summary.monthly_series,
        os.path.join(img_dir, "monthly.png"),
        width=chart_width,
        height=chart_height,
    )

    frame = transactions_frame(summary)
    frame.to_csv(os.path.join(out_dir, "transactions.csv"), index=False)

    # Render HTML
    template_dir = os.path.join(os.path.dirname(__file__), "templates")
    env = _template_env(template_dir)
    tpl = env.get_template("report.html.j2")
    html = tpl.render(
        generated_at=datetime.now(timezone.utc).isoformat(),
        month=summary.month,
        totals=[
            ("Amount Purchased", format_currency(summary.amount_purchased)),
            ("Amount Sold", format_currency(summary.amount_sold)),
            ("Profit/Loss", format_currency(summary.profit_loss)),
            ("Amount Remaining in Shares", format_currency(summary.remaining_in_shares)),
            ("Cash Delta", format_currency(summary.cash_delta)),
        ],
        holdings=format_holdings(summary.holdings),
        columns=list(frame.columns),
        rows=frame.to_dict(orient="records"),
        chart=os.path.relpath(chart, start=os.path.abspath(out_dir)),
    )

    out_html = os.path.join(out_dir, "index.html")
    with open(out_html, "w", encoding="utf-8") as f:
        f.write(html)
    return out_html
