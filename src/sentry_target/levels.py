"""Host log levels and their Sentry severities."""

from __future__ import annotations

import logging
from enum import IntEnum


class HostLevel(IntEnum):
    """Level ordinals used by the host logging pipeline."""

    ERROR = 0x01
    WARNING = 0x02
    INFO = 0x04
    TRACE = 0x08
    PROFILE = 0x40
    PROFILE_BEGIN = 0x50
    PROFILE_END = 0x60


# Sentry severities: "error" | "warning" | "info" | "debug"
_SEVERITIES: dict[int, str] = {
    HostLevel.ERROR: "error",
    HostLevel.WARNING: "warning",
    HostLevel.INFO: "info",
    HostLevel.TRACE: "debug",
    HostLevel.PROFILE_BEGIN: "debug",
    HostLevel.PROFILE_END: "debug",
}

DEFAULT_SEVERITY = "error"


def get_level(level: int) -> str:
    """Sentry severity for a host level. Unknown levels report as "error"."""
    return _SEVERITIES.get(level, DEFAULT_SEVERITY)


def get_level_name(level: int) -> str:
    return get_level(level)


def from_stdlib_level(levelno: int) -> HostLevel:
    """Map a ``logging`` level number onto the host ordinals."""
    if levelno >= logging.ERROR:
        return HostLevel.ERROR
    if levelno >= logging.WARNING:
        return HostLevel.WARNING
    if levelno >= logging.INFO:
        return HostLevel.INFO
    return HostLevel.TRACE
