"""refsweep error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Semantic
- 4xxx: Search
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Semantic (3xxx)
    NO_IDENTIFIER_AT_CURSOR = 3001
    NO_RESOLUTION = 3002
    SEMANTIC_SERVICE_FAILED = 3003

    # Search (4xxx)
    SEARCH_TOOL_NOT_FOUND = 4001
    SEARCH_TOOL_FAILED = 4002
    UNPARSEABLE_RESULT_LINE = 4003

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class RefSweepError(Exception):
    """Base error with structured context for CLI and JSON output."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'NO_RESOLUTION')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(RefSweepError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class ResolutionError(RefSweepError):
    """Semantic service could not answer a query."""

    @classmethod
    def no_identifier_at_cursor(cls, location: str) -> "ResolutionError":
        return cls(
            code=ErrorCode.NO_IDENTIFIER_AT_CURSOR,
            message=f"No identifier at cursor: {location}",
            details={"location": location},
        )

    @classmethod
    def no_resolution(cls, location: str, reason: str) -> "ResolutionError":
        return cls(
            code=ErrorCode.NO_RESOLUTION,
            message=f"Cannot resolve identifier at {location}: {reason}",
            details={"location": location, "reason": reason},
        )

    @classmethod
    def service_failed(cls, command: str, reason: str) -> "ResolutionError":
        return cls(
            code=ErrorCode.SEMANTIC_SERVICE_FAILED,
            message=f"Semantic service failed ({command}): {reason}",
            retryable=True,
            details={"command": command, "reason": reason},
        )


class SearchError(RefSweepError):
    """Text search tool errors. Fatal for the invocation."""

    @classmethod
    def tool_not_found(cls, executable: str) -> "SearchError":
        return cls(
            code=ErrorCode.SEARCH_TOOL_NOT_FOUND,
            message=f"Search tool not found: {executable}",
            details={"executable": executable},
        )

    @classmethod
    def tool_failed(cls, returncode: int | None, stderr: str) -> "SearchError":
        return cls(
            code=ErrorCode.SEARCH_TOOL_FAILED,
            message=f"Search tool exited with status {returncode}: {stderr.strip() or 'no output'}",
            retryable=True,
            details={"returncode": returncode, "stderr": stderr},
        )

    @classmethod
    def unparseable_line(cls, raw_text: str) -> "SearchError":
        return cls(
            code=ErrorCode.UNPARSEABLE_RESULT_LINE,
            message=f"Unparseable result line: {raw_text!r}",
            details={"raw_text": raw_text},
        )


class InternalError(RefSweepError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
