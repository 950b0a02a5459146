"""Wicketry error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Resource
- 4xxx: Filter
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Resource (3xxx)
    RESOURCE_WRITE_CALLBACK_MISSING = 3001
    RESOURCE_STREAM_FAILED = 3002
    RESPONSE_COMMITTED = 3003

    # Filter (4xxx)
    FILTER_PATH_NOT_FOUND = 4001
    FILTER_PATH_AMBIGUOUS = 4002
    FILTER_DESCRIPTOR_MALFORMED = 4003
    FILTER_MAPPING_INVALID = 4004


@dataclass(frozen=True, slots=True)
class WicketryError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'FILTER_PATH_NOT_FOUND')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(WicketryError):
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

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class ResourceStateError(WicketryError):
    """A resource produced a response descriptor that cannot be answered.

    Indicates a programming defect in the resource implementation.
    """

    @classmethod
    def write_callback_missing(cls, resource: str) -> "ResourceStateError":
        return cls(
            code=ErrorCode.RESOURCE_WRITE_CALLBACK_MISSING,
            message=(
                "ResourceResponse.write_callback must be set when data needs "
                f"to be written ({resource})"
            ),
            details={"resource": resource},
        )


class ResponseCommittedError(WicketryError):
    """Headers were changed after the response was committed."""

    @classmethod
    def header_after_commit(cls, header: str) -> "ResponseCommittedError":
        return cls(
            code=ErrorCode.RESPONSE_COMMITTED,
            message=f"Cannot set header '{header}': response already committed",
            details={"header": header},
        )


class ResourceStreamError(WicketryError):
    """I/O failure while streaming a resource body."""

    @classmethod
    def copy_failed(cls, reason: str, written: int) -> "ResourceStreamError":
        return cls(
            code=ErrorCode.RESOURCE_STREAM_FAILED,
            message=f"Failed to stream resource data: {reason}",
            details={"reason": reason, "bytes_written": written},
        )


class FilterPathError(WicketryError):
    """Mount path could not be resolved from the deployment descriptor."""

    @classmethod
    def not_found(cls, name: str, tag: str) -> "FilterPathError":
        return cls(
            code=ErrorCode.FILTER_PATH_NOT_FOUND,
            message=f"No <{tag}> with url-pattern found for '{name}'",
            details={"name": name, "tag": tag},
        )

    @classmethod
    def ambiguous(cls, name: str, patterns: list[str]) -> "FilterPathError":
        return cls(
            code=ErrorCode.FILTER_PATH_AMBIGUOUS,
            message=f"Multiple url-patterns mapped to '{name}': {', '.join(patterns)}",
            details={"name": name, "patterns": patterns},
        )

    @classmethod
    def malformed(cls, reason: str) -> "FilterPathError":
        return cls(
            code=ErrorCode.FILTER_DESCRIPTOR_MALFORMED,
            message=f"Malformed deployment descriptor: {reason}",
            details={"reason": reason},
        )

    @classmethod
    def invalid_mapping(cls, pattern: str) -> "FilterPathError":
        return cls(
            code=ErrorCode.FILTER_MAPPING_INVALID,
            message=f"Not a valid filter mapping (expected '/<path>/*'): {pattern}",
            details={"pattern": pattern},
        )
