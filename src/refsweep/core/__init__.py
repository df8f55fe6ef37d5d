"""Core module exports."""

from refsweep.core.errors import (
    ConfigError,
    ErrorCode,
    InternalError,
    RefSweepError,
    ResolutionError,
    SearchError,
)
from refsweep.core.logging import (
    clear_invocation_id,
    configure_logging,
    get_invocation_id,
    get_logger,
    set_invocation_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "InternalError",
    "RefSweepError",
    "ResolutionError",
    "SearchError",
    # Logging
    "clear_invocation_id",
    "configure_logging",
    "get_invocation_id",
    "get_logger",
    "set_invocation_id",
]
