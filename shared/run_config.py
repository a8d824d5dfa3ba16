"""Run configuration loading for the command-line driver.

Reads an optional YAML file naming the source to parse, the filename
filter and the output location. Non-strict loading falls back to defaults
on problems; strict loading raises ``ConfigValidationError``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_FILENAME_PATTERN = r"\.go$"
DEFAULT_OUTPUT_FILE = "output/parsed_sources.json"
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ConfigValidationError(RuntimeError):
    """Raised when strict run configuration validation fails."""


@dataclass(frozen=True)
class RunConfig:
    """Settings of one parse run."""

    source: Optional[str] = None
    filename_pattern: str = DEFAULT_FILENAME_PATTERN
    output_file: str = DEFAULT_OUTPUT_FILE
    debug_dump: bool = False
    log_level: str = "INFO"

    def with_overrides(self, **overrides: Any) -> "RunConfig":
        """Return a copy with every non-None override applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **values)


_FIELD_TYPES = {
    "source": str,
    "filename_pattern": str,
    "output_file": str,
    "debug_dump": bool,
    "log_level": str,
}


def _fail(msg: str, strict: bool, cause: Exception | None = None) -> RunConfig:
    if strict:
        raise ConfigValidationError(msg) from cause
    logger.warning("%s; continuing with defaults", msg)
    return RunConfig()


def load_run_config(config_path: str, strict: bool = False) -> RunConfig:
    """Load a run configuration from YAML.

    Unknown keys are ignored in non-strict mode and rejected in strict mode.
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            payload = yaml.safe_load(f)
    except FileNotFoundError as exc:
        return _fail(f"Run config file not found: {config_path}", strict, exc)
    except yaml.YAMLError as exc:
        return _fail(f"Failed to parse run config YAML at {config_path}: {exc}", strict, exc)

    if payload is None:
        return _fail(f"Run config file is empty: {config_path}", strict)

    if not isinstance(payload, dict):
        return _fail(
            f"Unexpected run config payload type: {type(payload).__name__}", strict
        )

    values: dict[str, Any] = {}
    known = {f.name for f in fields(RunConfig)}
    for key, value in payload.items():
        if key not in known:
            msg = f"Unknown run config key '{key}'"
            if strict:
                raise ConfigValidationError(msg)
            logger.warning("%s; ignoring", msg)
            continue
        expected = _FIELD_TYPES[key]
        if not isinstance(value, expected):
            msg = (
                f"Run config key '{key}' must be {expected.__name__}, "
                f"got {type(value).__name__}"
            )
            if strict:
                raise ConfigValidationError(msg)
            logger.warning("%s; using default", msg)
            continue
        values[key] = value

    level = str(values.get("log_level", "INFO")).upper()
    if level not in VALID_LOG_LEVELS:
        msg = f"Invalid log_level '{level}'"
        if strict:
            raise ConfigValidationError(msg)
        logger.warning("%s; using INFO", msg)
        level = "INFO"
    values["log_level"] = level

    return RunConfig(**values)
