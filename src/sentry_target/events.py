"""NormalizedEvent: the event shape handed to ``capture_event``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

UNSET: Any = object()


@dataclass
class NormalizedEvent:
    """Canonical event built from one non-exception record.

    Every field is optional: plain-message records only carry ``message``
    (plus ``extra["context"]`` when the context dump is on).
    """

    level: str | None = None  # "error" | "warning" | "info" | "debug"
    timestamp: float | None = None
    message: Any = UNSET
    tags: dict[str, Any] | None = None
    extra: dict[str, Any] | None = None

    def set_extra(self, key: str, value: Any) -> None:
        if self.extra is None:
            self.extra = {}
        self.extra[key] = value

    def to_dict(self) -> dict[str, Any]:
        """Wire mapping with only the populated fields."""
        d: dict[str, Any] = {}
        if self.level is not None:
            d["level"] = self.level
        if self.timestamp is not None:
            d["timestamp"] = self.timestamp
        if self.tags is not None:
            d["tags"] = dict(self.tags)
        if self.message is not UNSET:
            d["message"] = self.message
        if self.extra is not None:
            d["extra"] = dict(self.extra)
        return d
