"""
Chart utilities to render the monthly purchased/sold series.

Draws grouped bars (units purchased vs units sold) per month and saves a PNG
to a destination path (ensures parent directories exist).
"""

from __future__ import annotations

import os
from typing import Sequence

import matplotlib

# Use a non-interactive backend for headless environments
matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from stockledger.ledger.model import MonthTotals  # noqa: E402


def save_monthly_bar_png(
    series: Sequence[MonthTotals],
    out_path: str,
    width: float = 8.0,
    height: float = 4.0,
) -> str:
    """Render the monthly series as grouped bars and save to `out_path` (PNG).

    Returns the absolute path to the saved file.
    """
    if not series:
        raise ValueError("No months provided for charting")

    parent = os.path.dirname(out_path)
    if parent:
        os.makedirs(parent, exist_ok=True)

    xs = list(range(len(series)))
    bar_w = 0.4

    fig, ax = plt.subplots(figsize=(width, height))
    ax.set_title("Units purchased and sold per month")
    ax.bar([x - bar_w / 2 for x in xs], [m.purchased for m in series], bar_w, color="#8884d8", label="purchased")
    ax.bar([x + bar_w / 2 for x in xs], [m.sold for m in series], bar_w, color="#82ca9d", label="sold")
    ax.set_xticks(xs)
    ax.set_xticklabels([m.month for m in series])
    ax.legend(loc="best")
    ax.grid(True, axis="y", linestyle="--", alpha=0.5)

    fig.tight_layout()
    fig.savefig(out_path, dpi=120)
    plt.close(fig)
    return os.path.abspath(out_path)
