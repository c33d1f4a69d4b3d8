from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional


def log_ledger_event(
    event_type: str,
    month: str,
    symbol: str,
    date: Optional[str] = None,
    severity: str = "WARNING",
    extra: Optional[Dict[str, Any]] = None,
) -> None:
    """Emit a structured JSON log line for a ledger event.

    Keys: event, month, symbol, date, severity, component, schema_version
    """
    try:
        logger = logging.getLogger("stockledger.ledger")
        payload: Dict[str, Any] = {
            "event": str(event_type),
            "month": str(month),
            "symbol": str(symbol),
            "date": str(date) if date is not None else None,
            "severity": severity,
            "component": "ledger",
            "schema_version": "v1",
        }
        if extra:
            payload["extra"] = extra
        logger.log(logging.getLevelName(severity), json.dumps(payload, separators=(",", ":")))
    except Exception:
        # Logging must never throw
        pass
