"""
Configuration loader for stockledger.

What it does:
- Reads static settings from `config/config.yaml` (missing file => defaults).
- Applies environment-variable overrides: `STOCKLEDGER_DATA_PATH`,
  `STOCKLEDGER_STATE_PATH`, `STOCKLEDGER_DEFAULT_MONTH`, `REPORT_DIR`.
- Validates the resulting configuration using Pydantic models.

Where it is used:
- Called by `stockledger.main` to build a `Settings` object for runtime.
"""

import os
import pathlib
from typing import Any, Dict

import yaml
from pydantic import BaseModel, Field, field_validator


class ReportConfig(BaseModel):
    """Output location and chart size for the HTML report."""
    out_dir: str = "reports"
    chart_width: float = 8.0
    chart_height: float = 4.0

    @field_validator("chart_width", "chart_height")
    @classmethod
    def positive(cls, v, info):
        if v <= 0:
            raise ValueError(f"{info.field_name} must be positive")
        return v


class Settings(BaseModel):
    """Runtime settings assembled from YAML + environment variables."""
    data_path: str = "data/transactions.yaml"
    state_path: str = "data/state.sqlite"
    default_month: str = "January"
    report: ReportConfig = Field(default_factory=ReportConfig)


ENV_OVERRIDES = {
    "STOCKLEDGER_DATA_PATH": "data_path",
    "STOCKLEDGER_STATE_PATH": "state_path",
    "STOCKLEDGER_DEFAULT_MONTH": "default_month",
}


def load_settings(path: str = "config/config.yaml") -> Settings:
    """Load YAML config, apply env-var overrides, and return Settings."""
    config: Dict[str, Any] = {}
    p = pathlib.Path(path)
    if p.exists():
        with open(p, "r") as f:
            config = yaml.safe_load(f) or {}
    for env_name, key in ENV_OVERRIDES.items():
        val = os.getenv(env_name, "")
        if val:
            config[key] = val
    report_dir = os.getenv("REPORT_DIR", "")
    if report_dir:
        config["report"] = {**(config.get("report") or {}), "out_dir": report_dir}
    return Settings(**config)
