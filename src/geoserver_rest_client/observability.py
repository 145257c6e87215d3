from __future__ import annotations

import logging
from typing import Any, Dict

from .logging import RESERVED_LOG_KEYS

EVENT_LOGGER = "geoserver_rest_client.observability"


def event_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """
    Turn event fields into a LogRecord ``extra`` mapping.
    Names that collide with LogRecord attributes get a ``field_`` prefix
    (``name`` becomes ``field_name``); None values are left out.
    """
    extra: Dict[str, Any] = {}
    for key, val in fields.items():
        if val is None:
            continue
        extra[f"field_{key}" if key in RESERVED_LOG_KEYS else key] = val
    return extra


def log_event(event: str, logger: logging.Logger | None = None, **fields: Any) -> None:
    """INFO event for calls that delete resources or reset/reload the server."""
    log = logger or logging.getLogger(EVENT_LOGGER)
    log.info(event, extra={"event": event, **event_fields(fields)})


__all__ = ["EVENT_LOGGER", "event_fields", "log_event"]
