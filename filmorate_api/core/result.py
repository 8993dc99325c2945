"""Typed failure values returned by the domain services.

Services never raise for user-correctable problems: they return either the
value or a :class:`Failure`, and the HTTP layer decides the status code.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, TypeVar, Union

T = TypeVar("T")


class FailureKind(str, Enum):
    VALIDATION = "validation_error"
    NOT_FOUND = "not_found"
    STATE_CONFLICT = "state_conflict"


@dataclass(frozen=True)
class Failure:
    """A recoverable domain failure with a field-specific message."""

    kind: FailureKind
    message: str
    field: Optional[str] = None

    @classmethod
    def validation(cls, message: str, field: Optional[str] = None) -> Failure:
        return cls(FailureKind.VALIDATION, message, field)

    @classmethod
    def not_found(cls, message: str, field: Optional[str] = None) -> Failure:
        return cls(FailureKind.NOT_FOUND, message, field)

    @classmethod
    def conflict(cls, message: str, field: Optional[str] = None) -> Failure:
        return cls(FailureKind.STATE_CONFLICT, message, field)


Result = Union[T, Failure]


class StorageError(RuntimeError):
    """Storage contract violation; surfaces as an internal error."""
