"""Stable error codes and the tagged result returned by every service operation.

Services do not raise for domain failures. They return ``Result.fail(code)``
and leave the caller to branch on ``result.success``; only infrastructure
errors (database, programming errors) propagate as exceptions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorCode(str, Enum):
    """Error taxonomy shared by the registry, the block store and the attrition engine."""

    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_VERIFIED = "NOT_VERIFIED"
    NOT_FOUND = "NOT_FOUND"
    ALREADY_REGISTERED = "ALREADY_REGISTERED"
    POLICY_EXISTS = "POLICY_EXISTS"
    INVALID_DATES = "INVALID_DATES"
    INVALID_QUANTITY = "INVALID_QUANTITY"
    INVALID_PERCENTAGE = "INVALID_PERCENTAGE"


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of an operation: either a value or an error code, never both."""

    success: bool
    value: T | None = None
    error: ErrorCode | None = None

    @classmethod
    def ok(cls, value: T | None = None) -> "Result[T]":
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: ErrorCode) -> "Result[T]":
        return cls(success=False, error=error)

    def unwrap(self) -> T:
        """Return the value, or raise ``ValueError`` if the operation failed."""
        if not self.success:
            raise ValueError(f"Operation failed with {self.error.value}")
        return self.value  # type: ignore[return-value]
