"""
Explicit success/failure values returned by the core auth and application operations.

Route handlers turn an ``Err`` into an HTTP error with
``error_handlers.raise_for_error``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")

# Error codes carried by Err.code
VALIDATION_ERROR = "validation_error"
UNAUTHENTICATED = "unauthenticated"
NOT_FOUND = "not_found"
CONFLICT = "conflict"
INTERNAL_ERROR = "internal_error"


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful result."""

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """
    Failed result.

    - code: one of the module-level error codes (e.g. "not_found", "conflict")
    - message: user-facing / log message
    - details: optional extra context for debugging
    """

    code: str
    message: str
    details: dict | None = None

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]
