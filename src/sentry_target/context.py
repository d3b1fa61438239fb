"""Context dump: ambient process state attached to every reported event.

Sources:
    ENV      — process environment
    ARGV     — sys.argv
    PROCESS  — pid, executable, cwd, python version

``log_vars`` picks sources ("ENV") or single keys ("ENV.HOME").
``mask_vars`` are case-insensitive fnmatch patterns on "SOURCE.KEY";
matching values are replaced with "***".
"""

from __future__ import annotations

import os
import platform
import sys
from collections.abc import Iterable
from fnmatch import fnmatchcase
from pprint import pformat
from typing import Any, Callable

from sentry_target.config import DEFAULT_LOG_VARS, DEFAULT_MASK_VARS

MASK = "***"


def _process_info() -> dict[str, Any]:
    return {
        "pid": os.getpid(),
        "executable": sys.executable,
        "cwd": os.getcwd(),
        "python": platform.python_version(),
    }


SOURCES: dict[str, Callable[[], Any]] = {
    "ENV": lambda: dict(os.environ),
    "ARGV": lambda: list(sys.argv),
    "PROCESS": _process_info,
}


class ContextDumper:
    def __init__(
        self,
        log_vars: Iterable[str] = DEFAULT_LOG_VARS,
        mask_vars: Iterable[str] = DEFAULT_MASK_VARS,
    ) -> None:
        self.log_vars = tuple(log_vars)
        self.mask_vars = tuple(mask_vars)

    def _selection(self) -> dict[str, set[str] | None]:
        # source -> selected keys, None meaning the whole source
        selected: dict[str, set[str] | None] = {}
        for var in self.log_vars:
            source, _, key = var.partition(".")
            if source not in SOURCES:
                continue
            if not key:
                selected[source] = None
            elif source not in selected or selected[source] is not None:
                selected.setdefault(source, set()).add(key)  # type: ignore[union-attr]
        return selected

    def _masked(self, source: str, key: Any) -> bool:
        path = f"{source}.{key}".upper()
        return any(fnmatchcase(path, pattern.upper()) for pattern in self.mask_vars)

    def collect(self) -> dict[str, Any]:
        """Selected sources with masked values applied."""
        result: dict[str, Any] = {}
        for source, keys in self._selection().items():
            value = SOURCES[source]()
            if isinstance(value, dict):
                if keys is not None:
                    value = {k: v for k, v in value.items() if k in keys}
                value = {
                    k: MASK if self._masked(source, k) else v
                    for k, v in value.items()
                }
            result[source] = value
        return result

    def dump(self) -> str:
        """Render as "NAME = value" blocks. Empty when nothing is selected."""
        return "\n\n".join(
            f"{name} = {pformat(value)}" for name, value in self.collect().items()
        )
