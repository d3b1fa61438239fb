"""Host log records and the three payload shapes a record can carry.

A record's payload is classified once, when it is read:

    ExceptionPayload  — an exception instance, reported as-is
    StructuredPayload — a mapping, normalized into an event
    PlainPayload      — anything else, sent as the event message

Unexpected payload types are never rejected; they are plain.
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from sentry_target.levels import HostLevel

DEFAULT_CATEGORY = "application"


@dataclass(frozen=True)
class ExceptionPayload:
    error: BaseException


@dataclass(frozen=True)
class StructuredPayload:
    data: Mapping[str, Any]


@dataclass(frozen=True)
class PlainPayload:
    value: Any


Payload = Union[ExceptionPayload, StructuredPayload, PlainPayload]


def classify_payload(payload: Any) -> Payload:
    """Decide which of the three payload shapes a raw value is."""
    if isinstance(payload, BaseException):
        return ExceptionPayload(payload)
    if isinstance(payload, Mapping):
        return StructuredPayload(payload)
    return PlainPayload(payload)


@dataclass(frozen=True)
class LogRecord:
    """One entry handed over by the host pipeline. Read-only to targets."""

    payload: Any
    level: int = HostLevel.INFO
    category: str = DEFAULT_CATEGORY
    timestamp: float = field(default_factory=time.time)
    traces: tuple = ()
    memory: int | None = None
    # Classified once, when the record is built
    kind: Payload = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", classify_payload(self.payload))

    @classmethod
    def from_tuple(cls, entry: tuple | list) -> LogRecord:
        """Build from the host's positional form.

        ``(text, level, category, timestamp, traces[, memory])``
        """
        text, level, category, timestamp, traces, *rest = entry
        return cls(
            payload=text,
            level=level,
            category=category,
            timestamp=timestamp,
            traces=tuple(traces or ()),
            memory=rest[0] if rest else None,
        )
