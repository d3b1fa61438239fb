"""Shared fixtures: a recording client and a target wired to it."""

from __future__ import annotations

from typing import Any

import pytest

from sentry_target.config import SentryTargetConfig
from sentry_target.logging import shutdown_logging
from sentry_target.sentry import SentryTarget

_ENV_VARS = (
    "SENTRY_DSN",
    "SENTRY_ENVIRONMENT",
    "SENTRY_TARGET_CONTEXT",
    "SENTRY_TARGET_STACKTRACE",
    "SENTRY_TARGET_EXPORT_INTERVAL",
    "SENTRY_TARGET_LOG_LEVEL",
    "SENTRY_TARGET_LOG_FORMAT",
    "SENTRY_TARGET_LOG_PATH",
)

DSN = "https://public@o0.ingest.sentry.io/1"


class RecordingClient:
    """ReportingClient that keeps everything it is sent."""

    def __init__(self, options: dict[str, Any]) -> None:
        self.options = dict(options)
        self.exceptions: list[BaseException] = []
        self.events: list[dict[str, Any]] = []
        self.flushed = False
        self.closed = False

    def capture_exception(self, error: BaseException) -> None:
        self.exceptions.append(error)

    def capture_event(self, event: dict[str, Any]) -> None:
        self.events.append(event)

    def flush(self, timeout: float | None = None) -> None:
        self.flushed = True

    def close(self, timeout: float | None = None) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep the developer's SENTRY_* variables out of the tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    shutdown_logging()
    yield
    shutdown_logging()


@pytest.fixture()
def clients() -> list[RecordingClient]:
    """Every RecordingClient built by make_target, in creation order."""
    return []


@pytest.fixture()
def make_target(clients):
    """Build a SentryTarget whose client is a RecordingClient."""

    def factory(options):
        client = RecordingClient(options)
        clients.append(client)
        return client

    def _make(**overrides: Any) -> SentryTarget:
        config = SentryTargetConfig(dsn=DSN, environment="test")
        return SentryTarget(config, client_factory=factory, **overrides)

    return _make
