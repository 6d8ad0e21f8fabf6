"""Tagged success/failure values returned by theme operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from themeforge.errors import ErrorCode, ThemeForgeError, classify_exception

T = TypeVar("T")


@dataclass(frozen=True)
class ThemeResult(Generic[T]):
    """Either ``success`` with optional ``data`` or a failure with ``error``."""

    success: bool
    data: T | None = None
    error: str | None = None
    code: ErrorCode | None = None

    @classmethod
    def ok(cls, data: T | None = None) -> ThemeResult[T]:
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, code: ErrorCode = ErrorCode.OPERATION_FAILED) -> ThemeResult[T]:
        return cls(success=False, error=error, code=code)

    @classmethod
    def from_exception(cls, prefix: str, exc: Exception) -> ThemeResult[T]:
        """Wrap an unexpected exception, keeping its description in the message."""
        return cls(success=False, error=f"{prefix}: {exc}", code=classify_exception(exc).code)

    def __bool__(self) -> bool:
        return self.success

    def unwrap(self) -> T | None:
        """Return ``data`` or raise ThemeForgeError for a failure."""
        if self.success:
            return self.data
        raise ThemeForgeError(self.code or ErrorCode.OPERATION_FAILED, message=self.error or "")

