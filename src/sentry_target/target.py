"""LogTarget: the contract between a host logging pipeline and a sink.

The host hands batches to ``collect(records, final)``. Records pile up in
``messages`` until the batch is final or ``export_interval`` is reached,
then ``export()`` ships them and the batch is cleared.

Level/category filtering and log routing belong to the host pipeline.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

from sentry_target.config import DEFAULT_LOG_VARS, DEFAULT_MASK_VARS
from sentry_target.context import ContextDumper
from sentry_target.levels import HostLevel
from sentry_target.records import DEFAULT_CATEGORY, LogRecord


class LogTarget(ABC):
    def __init__(
        self,
        *,
        export_interval: int = 1000,
        log_vars: Iterable[str] = DEFAULT_LOG_VARS,
        mask_vars: Iterable[str] = DEFAULT_MASK_VARS,
    ) -> None:
        self.export_interval = export_interval
        self.context_dumper = ContextDumper(log_vars, mask_vars)
        self.messages: list[LogRecord] = []

    def collect(self, records: Iterable[Any], final: bool) -> None:
        """Accept a batch from the host; export when final or the interval is hit."""
        self.messages.extend(_as_record(r) for r in records)
        count = len(self.messages)
        if count == 0:
            return
        if not final and not (0 < self.export_interval <= count):
            return

        context = self.get_context_message()
        if context:
            self.messages.append(
                LogRecord(
                    payload=context,
                    level=HostLevel.INFO,
                    category=DEFAULT_CATEGORY,
                    timestamp=time.time(),
                )
            )
        try:
            self.export()
        finally:
            self.messages = []

    def dump_context(self) -> str:
        return self.context_dumper.dump()

    def get_context_message(self) -> str:
        """Context appended to each exported batch as an info record."""
        return self.dump_context()

    @abstractmethod
    def export(self) -> None:
        """Ship ``self.messages`` to the destination."""


def _as_record(entry: Any) -> LogRecord:
    if isinstance(entry, LogRecord):
        return entry
    return LogRecord.from_tuple(entry)
