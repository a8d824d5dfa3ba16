"""Shared logging, configuration and artifact helpers."""

from shared.structured_logging import (
    configure_structured_logging,
    current_phase,
    current_unit,
    get_run_id,
    phase_scope,
    set_run_id,
    unit_scope,
)
from shared.run_config import (
    ConfigValidationError,
    RunConfig,
    load_run_config,
)
from shared.run_artifacts import write_model_dump

__all__ = [
    "configure_structured_logging",
    "current_phase",
    "current_unit",
    "get_run_id",
    "phase_scope",
    "set_run_id",
    "unit_scope",
    "ConfigValidationError",
    "RunConfig",
    "load_run_config",
    "write_model_dump",
]
