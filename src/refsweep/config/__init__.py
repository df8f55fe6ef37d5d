"""Config module exports."""

from refsweep.config.loader import load_config
from refsweep.config.models import (
    LoggingConfig,
    RefSweepConfig,
    SearchConfig,
    SemanticConfig,
)

__all__ = [
    "load_config",
    "RefSweepConfig",
    "LoggingConfig",
    "SearchConfig",
    "SemanticConfig",
]
