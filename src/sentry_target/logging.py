"""structlog loggers for sentry_target's own lifecycle events.

Loggers are structlog BoundLoggers wrapping stdlib loggers under the
"sentry_target" namespace, so they accept logger.debug("event", key=value)
whether or not setup_logging() has run. setup_logging() only decides where
the package logger's output goes and how it is rendered.

The package logger never propagates to the root logger once configured:
a SentryLogHandler on the root must not see the target's own logs.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from sentry_target.config import LoggingConfig

PACKAGE_LOGGER = "sentry_target"

_PROCESSORS: list = [
    structlog.stdlib.filter_by_level,
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
]

_RENDERERS = {
    "json": structlog.processors.JSONRenderer,
    "console": structlog.dev.ConsoleRenderer,
}


def _managed(handler: logging.Handler) -> bool:
    return getattr(handler, "_sentry_target_managed", False)


def setup_logging(config: LoggingConfig | None = None) -> logging.Handler:
    """Attach a rendering handler to the package logger. Replaces any earlier one."""
    from sentry_target.config import LoggingConfig

    config = config or LoggingConfig()

    renderer_cls = _RENDERERS.get(config.log_format)
    if renderer_cls is None:
        raise ValueError(
            f"Unknown log format: {config.log_format!r}. "
            f"Available: {list(_RENDERERS)}."
        )

    shutdown_logging()

    handler: logging.Handler
    if config.log_path:
        handler = logging.FileHandler(config.log_path, mode="a", encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer_cls(),
            ],
        )
    )
    handler._sentry_target_managed = True  # type: ignore[attr-defined]

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, config.log_level.upper(), logging.INFO))
    package_logger.propagate = False
    return handler


def get_logger(name: str = PACKAGE_LOGGER, **initial_values: Any) -> Any:
    """structlog logger bound to the stdlib logger ``name``."""
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
        **initial_values,
    )


def shutdown_logging() -> None:
    """Close and detach the handler installed by setup_logging()."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in [h for h in package_logger.handlers if _managed(h)]:
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.propagate = True
