"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (REFSWEEP__SECTION__KEY)
3. Project YAML (<root>/.refsweep.yaml)
4. Global YAML (~/.config/refsweep/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    REFSWEEP__<SECTION>__<KEY>=<VALUE>

Examples:
    REFSWEEP__LOGGING__LEVEL=DEBUG
    REFSWEEP__SEARCH__EXECUTABLE=/opt/bin/rg
    REFSWEEP__SEMANTIC__LOOK_FOR=mli
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        REFSWEEP__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. DEBUG logs every candidate decision.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class SearchConfig(BaseModel):
    """Text search tool (ripgrep) configuration.

    Env vars:
        REFSWEEP__SEARCH__EXECUTABLE: ripgrep binary name or path
        REFSWEEP__SEARCH__FILE_TYPE: ripgrep --type filter
    """

    executable: str = Field(
        default="rg",
        description="ripgrep executable. Must support --vimgrep and --type.",
    )
    file_type: str = Field(
        default="ocaml",
        description="ripgrep file type scoping the search (see `rg --type-list`).",
    )
    globs: list[str] = Field(
        default_factory=list,
        description="Extra --glob filters, e.g. '!_build/**'.",
    )
    extra_args: list[str] = Field(
        default_factory=list,
        description="Extra arguments appended before the pattern.",
    )

    @field_validator("executable", "file_type")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v


class SemanticConfig(BaseModel):
    """Semantic service (Merlin) configuration.

    Env vars:
        REFSWEEP__SEMANTIC__EXECUTABLE: ocamlmerlin binary name or path
        REFSWEEP__SEMANTIC__LOOK_FOR: Resolve definitions in 'ml' or 'mli'
    """

    executable: str = Field(
        default="ocamlmerlin",
        description="Merlin executable, run in 'single' query mode.",
    )
    look_for: Literal["ml", "mli"] = Field(
        default="ml",
        description="Prefer implementation (ml) or interface (mli) definition sites.",
    )
    extra_flags: list[str] = Field(
        default_factory=list,
        description="Extra Merlin flags passed after the query, e.g. ['-build-path', '_build'].",
    )


class RefSweepConfig(BaseModel):
    """Root configuration for refsweep.

    All settings can be configured via:
    1. Environment variables: REFSWEEP__SECTION__KEY
    2. YAML config files (project or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    semantic: SemanticConfig = Field(default_factory=SemanticConfig)
