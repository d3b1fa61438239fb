"""Bridge from stdlib ``logging`` to a LogTarget.

    import logging
    from sentry_target import SentryLogHandler, SentryTarget

    handler = SentryLogHandler(SentryTarget(dsn=...), level=logging.WARNING)
    logging.getLogger().addHandler(handler)

    logging.getLogger("billing").warning({"msg": "card declined", "tags": {"psp": "stripe"}})
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sentry_target.levels import from_stdlib_level
from sentry_target.records import LogRecord
from sentry_target.target import LogTarget

# Loggers whose records are never forwarded
IGNORED_LOGGERS: tuple[str, ...] = ("sentry_target", "sentry_sdk")


def _ignored(name: str) -> bool:
    return any(name == n or name.startswith(n + ".") for n in IGNORED_LOGGERS)


def to_log_record(record: logging.LogRecord) -> LogRecord:
    """Convert a stdlib record into a host LogRecord."""
    payload: Any
    if record.exc_info and record.exc_info[1] is not None:
        payload = record.exc_info[1]
    elif isinstance(record.msg, Mapping):
        payload = dict(record.msg)
    else:
        payload = record.getMessage()
    return LogRecord(
        payload=payload,
        level=from_stdlib_level(record.levelno),
        category=record.name,
        timestamp=record.created,
    )


class SentryLogHandler(logging.Handler):
    """logging.Handler that hands every record to a LogTarget as a final batch."""

    def __init__(self, target: LogTarget, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.target = target

    def filter(self, record: logging.LogRecord) -> bool:
        if _ignored(record.name):
            return False
        return bool(super().filter(record))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.target.collect([to_log_record(record)], True)
        except Exception:
            self.handleError(record)

    def flush(self) -> None:
        flush = getattr(self.target, "flush", None)
        if flush is not None:
            flush()

    def close(self) -> None:
        try:
            close = getattr(self.target, "close", None)
            if close is not None:
                close()
        finally:
            super().close()
