"""Core shared utilities: logging context, library settings, run reports."""

from core.structured_logging import (
    configure_structured_logging,
    get_run_id,
    phase_scope,
    set_run_id,
)
from core.library_config import (
    ConfigValidationError,
    LibraryConfig,
    bundled_library_file,
    candidate_library_files,
    load_library_config,
    platform_library_name,
    resolve_strict_config_validation,
)
from core.run_artifacts import write_run_report

__all__ = [
    "configure_structured_logging",
    "get_run_id",
    "phase_scope",
    "set_run_id",
    "ConfigValidationError",
    "LibraryConfig",
    "bundled_library_file",
    "candidate_library_files",
    "load_library_config",
    "platform_library_name",
    "resolve_strict_config_validation",
    "write_run_report",
]
