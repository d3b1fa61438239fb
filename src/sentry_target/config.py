"""Target configuration: YAML file + env var overrides.

Priority: explicit argument > env var > YAML file > default.

Env vars:
    SENTRY_DSN                      — connection string
    SENTRY_ENVIRONMENT              — environment reported to Sentry (default "prod")
    SENTRY_TARGET_CONTEXT           — attach the context dump (default on)
    SENTRY_TARGET_STACKTRACE        — ask the client for stack traces (default on)
    SENTRY_TARGET_EXPORT_INTERVAL   — records collected before an export (default 1000)

Logging for the package itself:
    SENTRY_TARGET_LOG_LEVEL=INFO (default)
    SENTRY_TARGET_LOG_FORMAT=json (default) | console
    SENTRY_TARGET_LOG_PATH         — log to this file instead of stderr
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Callable

import yaml

_TRUTHY = {"1", "true", "on", "yes"}
_FALSY = {"0", "false", "off", "no"}

DEFAULT_LOG_VARS: tuple[str, ...] = ("ENV", "ARGV", "PROCESS")
DEFAULT_MASK_VARS: tuple[str, ...] = (
    "ENV.*PASSWORD*",
    "ENV.*SECRET*",
    "ENV.*TOKEN*",
    "ENV.*KEY*",
    "ENV.SENTRY_DSN",
)


def identity(value: Any) -> Any:
    """Default enrichment hook: returns its argument unchanged."""
    return value


def _flag(value: Any, default: bool) -> bool:
    """bool from a YAML/env value; unrecognised strings keep the default."""
    if isinstance(value, bool):
        return value
    val = str(value).strip().lower()
    if val in _TRUTHY:
        return True
    if val in _FALSY:
        return False
    return default


def _env_flag(name: str, default: bool) -> bool:
    return _flag(os.environ.get(name, ""), default)


@dataclass(frozen=True)
class SentryTargetConfig:
    """Settings for one SentryTarget. Immutable once built."""

    dsn: str | None = field(default_factory=lambda: os.environ.get("SENTRY_DSN"))
    # Forwarded verbatim to the client constructor
    client_options: dict[str, Any] = field(default_factory=dict)
    context: bool = field(
        default_factory=lambda: _env_flag("SENTRY_TARGET_CONTEXT", True)
    )
    stacktrace: bool = field(
        default_factory=lambda: _env_flag("SENTRY_TARGET_STACKTRACE", True)
    )
    environment: str = field(
        default_factory=lambda: os.environ.get("SENTRY_ENVIRONMENT", "prod")
    )
    extra_callback: Callable[[Any], Any] = identity
    log_vars: tuple[str, ...] = DEFAULT_LOG_VARS
    mask_vars: tuple[str, ...] = DEFAULT_MASK_VARS
    export_interval: int = field(
        default_factory=lambda: int(
            os.environ.get("SENTRY_TARGET_EXPORT_INTERVAL", "1000")
        )
    )

    def client_init_options(self) -> dict[str, Any]:
        """Options for the client constructor. The fixed keys win over client_options."""
        return {
            **self.client_options,
            "dsn": self.dsn,
            "attach_stacktrace": self.stacktrace,
            "environment": self.environment,
        }

    @classmethod
    def load(cls, path: Path | None = None, **overrides: Any) -> SentryTargetConfig:
        """Load settings from a YAML file, letting env vars and overrides win.

        The file holds a flat mapping of field names, e.g.::

            dsn: https://key@o0.ingest.sentry.io/1
            context: false
            client_options:
              release: "1.2.3"
        """
        file_values: dict[str, Any] = {}
        if path is not None and Path(path).exists():
            raw = yaml.safe_load(Path(path).read_text()) or {}
            if not isinstance(raw, dict):
                raise ValueError(
                    f"Sentry target config {str(path)!r} must be a mapping, "
                    f"got {type(raw).__name__}"
                )
            known = {f.name for f in fields(cls)} - {"extra_callback"}
            unknown = set(raw) - known
            if unknown:
                raise ValueError(
                    f"Unknown sentry target settings: {sorted(unknown)}. "
                    f"Available: {sorted(known)}."
                )
            file_values = dict(raw)
            for name in ("log_vars", "mask_vars"):
                if name in file_values:
                    file_values[name] = tuple(file_values[name])
            # Quoted YAML values ("off", "10") arrive as strings
            for name in ("context", "stacktrace"):
                if name in file_values:
                    file_values[name] = _flag(file_values[name], True)
            if "export_interval" in file_values:
                file_values["export_interval"] = int(file_values["export_interval"])

        # Env vars beat the file: drop file values that the env sets
        env_backed = {
            "dsn": "SENTRY_DSN",
            "environment": "SENTRY_ENVIRONMENT",
            "context": "SENTRY_TARGET_CONTEXT",
            "stacktrace": "SENTRY_TARGET_STACKTRACE",
            "export_interval": "SENTRY_TARGET_EXPORT_INTERVAL",
        }
        for name, env_key in env_backed.items():
            if env_key in os.environ:
                file_values.pop(name, None)

        return cls(**{**file_values, **overrides})


@dataclass
class LoggingConfig:
    """Logging for sentry_target itself, env-var driven."""

    log_level: str = field(
        default_factory=lambda: os.environ.get("SENTRY_TARGET_LOG_LEVEL", "INFO")
    )

    log_format: str = field(
        default_factory=lambda: os.environ.get("SENTRY_TARGET_LOG_FORMAT", "json")
    )  # "json" | "console"

    # Append to this file instead of stderr
    log_path: str | None = field(
        default_factory=lambda: os.environ.get("SENTRY_TARGET_LOG_PATH")
    )
