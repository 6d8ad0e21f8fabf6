"""Error codes and error handling utilities for ThemeForge."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any

import yaml


class ErrorCode(Enum):
    """Standardized error codes for theme operations."""

    # Input errors
    INVALID_ARGUMENT = auto()
    NOT_FOUND = auto()

    # Registry errors
    DUPLICATE_ID = auto()
    DUPLICATE_NAME = auto()
    VALIDATION_FAILED = auto()

    # Bundle errors
    BUNDLE_INVALID = auto()
    BUNDLE_UNSUPPORTED_FORMAT = auto()
    FILE_NOT_FOUND = auto()
    FILE_ACCESS_DENIED = auto()

    # Configuration errors
    CONFIG_INVALID = auto()
    CONFIG_MISSING = auto()

    # Operation errors
    OPERATION_FAILED = auto()
    INTERNAL_ERROR = auto()


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.INVALID_ARGUMENT: "An argument has the wrong type or shape.",
    ErrorCode.NOT_FOUND: "The requested theme value could not be found.",

    ErrorCode.DUPLICATE_ID: "A theme with this id is already registered.",
    ErrorCode.DUPLICATE_NAME: "A different theme already uses this name.",
    ErrorCode.VALIDATION_FAILED: "The theme is missing required fields or property groups.",

    ErrorCode.BUNDLE_INVALID: "The theme bundle is malformed. Re-export it and try again.",
    ErrorCode.BUNDLE_UNSUPPORTED_FORMAT: "Unsupported bundle format. Use json or yaml.",
    ErrorCode.FILE_NOT_FOUND: "The file was not found. It may have been moved or deleted.",
    ErrorCode.FILE_ACCESS_DENIED: "Access denied. Check file permissions.",

    ErrorCode.CONFIG_INVALID: "Configuration is invalid. Reset to defaults?",
    ErrorCode.CONFIG_MISSING: "Configuration value not found. Using defaults.",

    ErrorCode.OPERATION_FAILED: "Operation failed. See details for more information.",
    ErrorCode.INTERNAL_ERROR: "An unexpected internal error occurred.",
}


class UnsupportedNodeError(TypeError):
    """Raised when a property tree holds a value that is not scalar, date, list or record."""


@dataclass
class ThemeForgeError(Exception):
    """Base exception for ThemeForge with error code and context."""

    code: ErrorCode
    message: str = ""
    path: Path | None = None
    details: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.message:
            self.message = ERROR_MESSAGES.get(self.code, "An unexpected error occurred.")

    def __str__(self) -> str:
        parts = [self.message]
        if self.path:
            parts.append(f"\nFile: {self.path}")
        if self.details:
            details_str = " | ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"\nDetails: {details_str}")
        return "".join(parts)


def classify_exception(exc: Exception, path: Path | None = None) -> ThemeForgeError:
    """Classify a generic exception into a ThemeForgeError with appropriate code."""
    if isinstance(exc, ThemeForgeError):
        return exc

    exc_name = type(exc).__name__
    exc_str = str(exc).lower()
    details = {"original": exc_str}

    # File system errors
    if isinstance(exc, FileNotFoundError) or "no such file" in exc_str:
        return ThemeForgeError(ErrorCode.FILE_NOT_FOUND, path=path, details=details)
    if isinstance(exc, PermissionError) or "permission denied" in exc_str:
        return ThemeForgeError(ErrorCode.FILE_ACCESS_DENIED, path=path, details=details)

    # Decode errors from bundle parsing
    if isinstance(exc, (json.JSONDecodeError, yaml.YAMLError)):
        return ThemeForgeError(
            ErrorCode.BUNDLE_INVALID,
            message=f"{exc_name}: {exc}",
            path=path,
            details=details,
        )
    if isinstance(exc, UnicodeDecodeError):
        return ThemeForgeError(ErrorCode.BUNDLE_INVALID, path=path, details=details)

    # Tree utility and attribute access failures on malformed themes
    if isinstance(exc, (TypeError, AttributeError, KeyError)):
        return ThemeForgeError(
            ErrorCode.INTERNAL_ERROR,
            message=f"{exc_name}: {exc}",
            path=path,
            details=details,
        )

    # Default
    return ThemeForgeError(
        ErrorCode.OPERATION_FAILED,
        message=f"{exc_name}: {exc}",
        path=path,
        details=details,
    )
