from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Result(Generic[T]):
    """Outcome of a call to an upstream collaborator.

    Exactly one of ``value`` / ``error`` is meaningful: a result is a
    failure whenever ``error`` is set.
    """

    value: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: str | BaseException) -> "Result[T]":
        message = str(error)
        if not message and isinstance(error, BaseException):
            message = error.__class__.__name__
        return cls(error=message)
