"""
logfmt output for the client's log records.

Request records (``geoserver.request``) carry the request fields below;
events from ``log_event`` carry whatever fields the caller passed
(``workspace``, ``resource``, ``store_type``, ``location``, ...). Both are
rendered: the request fields first in a fixed order, every other extra after
them sorted by name.
"""

import logging
from typing import Any, Iterator, Tuple

REQUEST_FIELDS = ("operation", "method", "url", "status", "duration_ms")

# attributes every LogRecord has, plus the ones Formatter.format adds
RESERVED_LOG_KEYS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime"}


def record_extras(record: logging.LogRecord) -> Iterator[Tuple[str, Any]]:
    """Caller-supplied ``extra`` fields of a record, request fields first."""
    for key in REQUEST_FIELDS:
        val = getattr(record, key, None)
        if val is not None:
            yield key, val

    # "event" repeats the message
    skip = RESERVED_LOG_KEYS | set(REQUEST_FIELDS) | {"event"}
    for key in sorted(k for k in vars(record) if k not in skip):
        val = getattr(record, key)
        if val is not None:
            yield key, val


class LogfmtFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        kv = [f"level={record.levelname.lower()}", f"logger={record.name}"]

        msg = record.getMessage()
        if msg:
            kv.append(f"event={_fmt_val(msg)}")
        kv.extend(f"{key}={_fmt_val(val)}" for key, val in record_extras(record))

        if record.exc_info:
            kv.append(f"exc_type={record.exc_info[0].__name__}")
        return " ".join(kv)


def _fmt_val(val: Any) -> str:
    if isinstance(val, (bool, int, float)):
        return str(val)
    text = str(val)
    if not text or any(c in text for c in ' ="'):
        return '"' + text.replace('"', '\\"') + '"'
    return text


def setup_logging(level: str = "INFO") -> None:
    """Send all records to stderr as logfmt; replaces existing root handlers."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(LogfmtFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


__all__ = [
    "LogfmtFormatter",
    "REQUEST_FIELDS",
    "RESERVED_LOG_KEYS",
    "record_extras",
    "setup_logging",
]
