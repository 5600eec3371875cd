"""Tagged success/failure steps.

A ``Result`` is either ``Ok(value)`` or ``Err(error)``. Binding a function
onto an ``Ok`` runs it with the value; binding onto an ``Err`` returns the
``Err`` untouched, so a chain of steps stops at the first failure and the
caller only inspects the outcome once, at the end.

Usage:
    def parse_age(text: str) -> Result[int, StepwiseError]:
        if not text.isdigit():
            return Err(StepwiseError(f"not a number: {text!r}"))
        return Ok(int(text))

    outcome = parse_age("41").bind(check_adult).map(describe)
    match outcome:
        case Ok(value):
            print(value)
        case Err(error):
            print(error.message)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, final

if TYPE_CHECKING:
    from collections.abc import Callable


class UnwrapError(Exception):
    """Raised when a value is demanded from a step that does not hold one."""


@final
@dataclass(frozen=True, slots=True)
class Ok[T]:
    """A successful step holding a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Returns the contained value."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        """Returns the contained value, ignoring the default."""
        return self.value

    def unwrap_err(self) -> object:
        """Raises UnwrapError since this is not an Err."""
        raise UnwrapError(f"Called unwrap_err on Ok value: {self.value!r}")

    def bind[U, E](self, fn: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Feeds the contained value to fn and returns its result."""
        return fn(self.value)

    def and_then[U, E](self, fn: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Alias of bind."""
        return fn(self.value)

    def map[U](self, fn: Callable[[T], U]) -> Ok[U]:
        """Applies fn to the contained value, returning Ok(fn(value))."""
        return Ok(fn(self.value))

    def map_err(self, fn: Callable[[object], object]) -> Ok[T]:
        """Returns self unchanged since this is Ok."""
        return self

    def or_else(self, fn: Callable[[object], object]) -> Ok[T]:
        """Returns self unchanged since this is Ok."""
        return self


@final
@dataclass(frozen=True, slots=True)
class Err[E]:
    """A failed step holding an error payload."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> object:
        """Raises UnwrapError carrying the contained error."""
        raise UnwrapError(f"Called unwrap on Err value: {self.error!r}")

    def unwrap_or[T](self, default: T) -> T:
        """Returns the default value."""
        return default

    def unwrap_err(self) -> E:
        """Returns the contained error."""
        return self.error

    def bind(self, fn: Callable[[object], object]) -> Err[E]:
        """Returns self without calling fn."""
        return self

    def and_then(self, fn: Callable[[object], object]) -> Err[E]:
        """Alias of bind."""
        return self

    def map(self, fn: Callable[[object], object]) -> Err[E]:
        """Returns self unchanged since this is Err."""
        return self

    def map_err[F](self, fn: Callable[[E], F]) -> Err[F]:
        """Applies fn to the contained error, returning Err(fn(error))."""
        return Err(fn(self.error))

    def or_else[T, F](self, fn: Callable[[E], Result[T, F]]) -> Result[T, F]:
        """Applies the recovery function to the contained error."""
        return fn(self.error)


type Result[T, E] = Ok[T] | Err[E]


def from_call[T](
    fn: Callable[..., T],
    *args: object,
    catch: tuple[type[Exception], ...] = (Exception,),
) -> Result[T, Exception]:
    """Runs fn, turning an exception of one of the ``catch`` types into an Err."""
    try:
        return Ok(fn(*args))
    except catch as e:
        return Err(e)
