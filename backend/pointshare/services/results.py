"""Typed outcomes shared by validation rules and request lifecycle operations.

Expected failures (bad input, missing rows, wrong owner, wrong status, low
balance) are returned as values rather than raised, so callers can inspect
them and the API layer can translate them into ``{"error": ...}`` responses.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Failure classification with its HTTP-style status code."""

    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    INVALID_INPUT = "invalid_input"
    INVALID_STATE = "invalid_state"
    INSUFFICIENT_RESOURCE = "insufficient_resource"
    INTERNAL_FAULT = "internal_fault"

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self]


STATUS_CODES = {
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.INVALID_STATE: 400,
    ErrorKind.INSUFFICIENT_RESOURCE: 400,
    ErrorKind.INTERNAL_FAULT: 500,
}


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation rule: valid, or an error message and status."""

    valid: bool
    error: str | None = None
    status: int | None = None
    kind: ErrorKind | None = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def fail(cls, kind: ErrorKind, error: str) -> "ValidationResult":
        return cls(valid=False, error=error, status=kind.status_code, kind=kind)

    def as_dict(self) -> dict:
        """Plain mapping in the ``{valid, error, status}`` shape."""
        if self.valid:
            return {"valid": True}
        return {"valid": False, "error": self.error, "status": self.status}


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Outcome of a lifecycle operation: a value or a failed validation."""

    value: T | None = None
    failure: ValidationResult | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, value: T) -> "OperationResult[T]":
        return cls(value=value)

    @classmethod
    def rejected(cls, failure: ValidationResult) -> "OperationResult[T]":
        return cls(failure=failure)

    @classmethod
    def error(cls, kind: ErrorKind, message: str) -> "OperationResult[T]":
        return cls(failure=ValidationResult.fail(kind, message))


INTERNAL_ERROR_MESSAGE = "Internal server error"
