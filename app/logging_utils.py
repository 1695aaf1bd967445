"""
Structured logging helpers for snapshot imports and judgment bookkeeping.

Each event is one JSON object per log line so imports can be audited by
period and record count with plain log tooling.
"""

from __future__ import annotations

import json
import logging
from typing import Any


def event_payload(event: str, **fields: Any) -> str:
    """
    Serialize one event as compact JSON. Fields set to None are dropped.
    """

    payload: dict[str, Any] = {"event": event}
    payload.update({key: value for key, value in fields.items() if value is not None})
    return json.dumps(payload, default=str, sort_keys=True, ensure_ascii=False)


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    **fields: Any,
) -> None:
    """
    Emit one structured log line when ``level`` is enabled for ``logger``.
    """

    if logger.isEnabledFor(level):
        logger.log(level, event_payload(event, **fields))
