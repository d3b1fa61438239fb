"""sentry_target: forward host log records to Sentry.

Public API:
    SentryTarget(config, **overrides)  — log target that reports to Sentry
    SentryLogHandler(target)           — stdlib logging bridge
    SentryTargetConfig.load(path)      — YAML + env configuration

Logging (structlog):
    setup_logging(cfg)  — configure the package's own logs
    get_logger(name)    — structured logger
"""

from sentry_target.client import ReportingClient, SentryClient, build_client
from sentry_target.config import LoggingConfig, SentryTargetConfig
from sentry_target.context import ContextDumper
from sentry_target.events import NormalizedEvent
from sentry_target.handler import SentryLogHandler
from sentry_target.levels import HostLevel, from_stdlib_level, get_level, get_level_name
from sentry_target.logging import get_logger, setup_logging, shutdown_logging
from sentry_target.records import (
    ExceptionPayload,
    LogRecord,
    PlainPayload,
    StructuredPayload,
    classify_payload,
)
from sentry_target.sentry import SentryTarget
from sentry_target.target import LogTarget

__all__ = [
    # Targets
    "LogTarget",
    "SentryTarget",
    "SentryLogHandler",
    # Records and events
    "LogRecord",
    "ExceptionPayload",
    "StructuredPayload",
    "PlainPayload",
    "classify_payload",
    "NormalizedEvent",
    # Levels
    "HostLevel",
    "get_level",
    "get_level_name",
    "from_stdlib_level",
    # Clients
    "ReportingClient",
    "SentryClient",
    "build_client",
    # Configuration
    "SentryTargetConfig",
    "LoggingConfig",
    "ContextDumper",
    # Logging
    "get_logger",
    "setup_logging",
    "shutdown_logging",
]
