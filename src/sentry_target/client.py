"""Reporting clients: what a target dispatches events to.

ReportingClient is the two-call contract the target relies on.
SentryClient implements it on top of sentry_sdk.Client, bound to the
options it was built with rather than to the process-global hub, so
several targets can report to different projects side by side.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

import sentry_sdk
from sentry_sdk.utils import event_from_exception


@runtime_checkable
class ReportingClient(Protocol):
    """Where normalized events and exceptions get sent."""

    def capture_exception(self, error: BaseException) -> Any: ...

    def capture_event(self, event: dict[str, Any]) -> Any: ...


class SentryClient:
    """ReportingClient backed by a dedicated sentry_sdk.Client."""

    def __init__(self, options: Mapping[str, Any]) -> None:
        self._client = sentry_sdk.Client(**options)

    @property
    def options(self) -> dict[str, Any]:
        return self._client.options

    def capture_exception(self, error: BaseException) -> str | None:
        event, hint = event_from_exception(error, client_options=self._client.options)
        return self._client.capture_event(event, hint=hint)

    def capture_event(self, event: dict[str, Any]) -> str | None:
        return self._client.capture_event(dict(event))

    def flush(self, timeout: float | None = None) -> None:
        self._client.flush(timeout=timeout)

    def close(self, timeout: float | None = None) -> None:
        self._client.close(timeout=timeout)


def build_client(options: Mapping[str, Any]) -> ReportingClient:
    """Default client factory."""
    return SentryClient(options)
