"""SentryTarget: records host log messages in Sentry.

Each exported record becomes one Sentry call:

    exception payload  → capture_exception(error)
    mapping payload    → capture_event({level, timestamp, message, tags, extra})
    anything else      → capture_event({message})

Exceptions skip normalization entirely. Mapping payloads may carry a
``msg`` key (becomes the event message) and a ``tags`` mapping (merged
over the default ``{"category": ...}`` tag); everything else lands in
``extra``. With ``context`` on, the context dump is added as
``extra["context"]``. The enrichment hook sees every outgoing exception
or event mapping last, and its return value is what gets sent.

Nothing here catches errors: a failing hook or client surfaces to
whoever flushed the batch.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import Any, Callable

from sentry_target.client import ReportingClient, build_client
from sentry_target.config import SentryTargetConfig
from sentry_target.events import NormalizedEvent
from sentry_target.levels import get_level, get_level_name
from sentry_target.logging import get_logger
from sentry_target.records import (
    ExceptionPayload,
    LogRecord,
    PlainPayload,
    StructuredPayload,
)
from sentry_target.target import LogTarget

ClientFactory = Callable[[Mapping[str, Any]], ReportingClient]


def _get_logger():
    return get_logger("sentry_target.sentry")


class SentryTarget(LogTarget):
    """Log target that forwards records to a Sentry client.

    Pass a SentryTargetConfig, keyword overrides of its fields, or both::

        target = SentryTarget(dsn="https://key@o0.ingest.sentry.io/1", context=False)
    """

    get_level = staticmethod(get_level)
    get_level_name = staticmethod(get_level_name)

    def __init__(
        self,
        config: SentryTargetConfig | None = None,
        *,
        client_factory: ClientFactory = build_client,
        **overrides: Any,
    ) -> None:
        config = config or SentryTargetConfig()
        if overrides:
            config = replace(config, **overrides)
        super().__init__(
            export_interval=config.export_interval,
            log_vars=config.log_vars,
            mask_vars=config.mask_vars,
        )
        self.config = config
        self._client_factory = client_factory
        self._client: ReportingClient | None = None
        self._client_lock = threading.Lock()

    @property
    def dsn(self) -> str | None:
        return self.config.dsn

    @property
    def context(self) -> bool:
        return self.config.context

    @property
    def stacktrace(self) -> bool:
        return self.config.stacktrace

    @property
    def client(self) -> ReportingClient | None:
        return self._client

    def ensure_client(self) -> ReportingClient:
        """Build the client on first use; later calls return the same one."""
        client = self._client
        if client is not None:
            return client
        with self._client_lock:
            if self._client is None:
                self._client = self._client_factory(self.config.client_init_options())
                _get_logger().debug(
                    "sentry.client.created",
                    environment=self.config.environment,
                    attach_stacktrace=self.config.stacktrace,
                )
            return self._client

    def collect(self, records: Iterable[Any], final: bool) -> None:
        self.ensure_client()
        super().collect(records, final)

    def get_context_message(self) -> str:
        # Context travels inside each event instead of as a separate record
        return ""

    def export(self) -> None:
        client = self.ensure_client()
        events = exceptions = 0

        for record in self.messages:
            kind = record.kind
            if isinstance(kind, ExceptionPayload):
                client.capture_exception(self.run_extra_callback(kind.error))
                exceptions += 1
                continue

            event = self.normalize(record, kind)
            client.capture_event(self.run_extra_callback(event.to_dict()))
            events += 1

        _get_logger().debug(
            "sentry.export.completed", events=events, exceptions=exceptions
        )

    def normalize(
        self, record: LogRecord, kind: StructuredPayload | PlainPayload
    ) -> NormalizedEvent:
        """Build the event for a non-exception record from its classified payload."""
        if isinstance(kind, StructuredPayload):
            data = dict(kind.data)
            event = NormalizedEvent(
                level=self.get_level(record.level),
                timestamp=record.timestamp,
                tags={"category": record.category},
            )
            if data.get("msg") is not None:
                event.message = data.pop("msg")
            if data.get("tags") is not None:
                event.tags = _merge(event.tags or {}, data.pop("tags"))
            event.extra = data
        else:
            event = NormalizedEvent(message=kind.value)

        if self.context:
            event.set_extra("context", self.dump_context())
        return event

    def run_extra_callback(self, data: Any) -> Any:
        """Pass an outgoing exception or event mapping through the enrichment hook."""
        return self.config.extra_callback(data)

    def flush(self, timeout: float | None = None) -> None:
        flush = getattr(self._client, "flush", None)
        if flush is not None:
            flush(timeout=timeout)

    def close(self, timeout: float | None = None) -> None:
        close = getattr(self._client, "close", None)
        if close is not None:
            close(timeout=timeout)


def _merge(base: Mapping[str, Any], incoming: Any) -> dict[str, Any]:
    """Recursive merge; keys from ``incoming`` win."""
    merged = dict(base)
    if not isinstance(incoming, Mapping):
        return merged
    for key, value in incoming.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = _merge(current, value)
        else:
            merged[key] = value
    return merged
