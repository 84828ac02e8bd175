"""
Two-variant result type used by every pipeline step.

Expected failures (missing fields, unknown student, malformed tables) travel
as ``Err`` values instead of exceptions. ``and_then`` chains steps and stops
at the first ``Err``.
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


class UnwrapError(Exception):
    """Raised when unwrap() is called on an Err."""

    def __init__(self, error):
        super().__init__(str(error))
        self.error = error


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def and_then(self, fn: Callable[[T], "Result[U, Any]"]) -> "Result[U, Any]":
        return fn(self.value)

    def map(self, fn: Callable[[T], U]) -> "Ok[U]":
        return Ok(fn(self.value))

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E

    @property
    def is_ok(self) -> bool:
        return False

    def and_then(self, fn: Callable[[Any], "Result[Any, E]"]) -> "Err[E]":
        return self

    def map(self, fn: Callable[[Any], Any]) -> "Err[E]":
        return self

    def unwrap(self):
        raise UnwrapError(self.error)


Result = Union[Ok[T], Err[E]]
