from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Step[T](Protocol):
    """Anything that can be sequenced: Maybe, Result, IO and Parser all qualify."""

    def bind(self, fn: Callable[[T], Any]) -> Any: ...
    def map(self, fn: Callable[[T], Any]) -> Any: ...
