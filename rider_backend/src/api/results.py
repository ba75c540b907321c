from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterable, Tuple, TypeVar, Union

from src.api.errors import ErrorCode

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome of a pipeline stage."""
    value: T


@dataclass(frozen=True)
class Err:
    """
    Failed outcome of a pipeline stage.

    Carries the HTTP status to answer with and the ordered error codes.
    """
    status_code: int
    errors: Tuple[ErrorCode, ...]

    @classmethod
    def of(cls, status_code: int, errors: Iterable[ErrorCode]) -> "Err":
        return cls(status_code=status_code, errors=tuple(errors))

    def codes(self) -> list[str]:
        """Return error codes as plain strings for serialization."""
        return [code.value for code in self.errors]


Result = Union[Ok[T], Err]
