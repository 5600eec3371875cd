"""Optional-value steps.

``Some(value)`` holds a value and ``NOTHING`` marks its absence. Binding onto
``NOTHING`` skips the function, so a lookup chain such as

    directory.find(name).bind(directory.manager_of).map(lambda p: p.phone)

needs no ``is None`` check between the steps.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, final

from stepwise.result import Err, Ok, UnwrapError

if TYPE_CHECKING:
    from collections.abc import Callable

    from stepwise.result import Result


@final
@dataclass(frozen=True, slots=True)
class Some[T]:
    """A present value. ``Some(None)`` is a present ``None``, not an absence."""

    value: T

    def is_some(self) -> bool:
        return True

    def is_nothing(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def value_or(self, default: T) -> T:
        return self.value

    def bind[U](self, fn: Callable[[T], Maybe[U]]) -> Maybe[U]:
        """Feeds the contained value to fn and returns its result."""
        return fn(self.value)

    def map[U](self, fn: Callable[[T], U]) -> Some[U]:
        return Some(fn(self.value))

    def filter(self, predicate: Callable[[T], bool]) -> Maybe[T]:
        return self if predicate(self.value) else NOTHING

    def or_else(self, fn: Callable[[], Maybe[T]]) -> Some[T]:
        return self

    def to_result[E](self, error: E) -> Result[T, E]:
        return Ok(self.value)


@final
@dataclass(frozen=True, slots=True)
class Nothing:
    """The absent value. Use the ``NOTHING`` singleton."""

    def is_some(self) -> bool:
        return False

    def is_nothing(self) -> bool:
        return True

    def unwrap(self) -> object:
        raise UnwrapError("Called unwrap on Nothing")

    def value_or[T](self, default: T) -> T:
        return default

    def bind(self, fn: Callable[[object], object]) -> Nothing:
        """Returns NOTHING without calling fn."""
        return self

    def map(self, fn: Callable[[object], object]) -> Nothing:
        return self

    def filter(self, predicate: Callable[[object], bool]) -> Nothing:
        return self

    def or_else[T](self, fn: Callable[[], Maybe[T]]) -> Maybe[T]:
        return fn()

    def to_result[E](self, error: E) -> Err[E]:
        return Err(error)

    def __repr__(self) -> str:
        return "NOTHING"


NOTHING = Nothing()

type Maybe[T] = Some[T] | Nothing


def from_optional[T](value: T | None) -> Maybe[T]:
    """Lifts a value that may be ``None``, mapping ``None`` to ``NOTHING``."""
    return NOTHING if value is None else Some(value)
