"""Generator-based "do" blocks for any step type.

Inside a block, ``x = yield step`` binds the value of ``step`` to ``x``, and
the block's ``return`` value is lifted with the ``pure`` function given to
the decorator:

    @do(Some)
    def manager_phone(directory: Directory, name: str) -> Generator[Maybe[Any], Any, str]:
        person = yield directory.find(name)
        manager = yield directory.manager_of(person)
        return manager.phone

If a step short-circuits, the rest of the block never runs.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Generator, Iterable

    from stepwise.protocols import Step


def do[S](pure: Callable[[Any], S]) -> Callable[[Callable[..., Generator[Any, Any, Any]]], Callable[..., S]]:
    """Turns a generator function into a function returning a single step.

    The generator is replayed from the start with the values recorded so
    far each time a step produces a value. Steps that run more than once
    (a Parser applied to several inputs, an IO run twice) therefore see a
    fresh generator every time. Code between the yields must be free of
    side effects for the same reason.
    """

    def decorator(fn: Callable[..., Generator[Any, Any, Any]]) -> Callable[..., S]:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> S:
            def resume(history: tuple[Any, ...]) -> Any:
                gen = fn(*args, **kwargs)
                try:
                    step = next(gen)
                    for value in history:
                        step = gen.send(value)
                except StopIteration as stop:
                    return pure(stop.value)
                return step.bind(lambda value: resume((*history, value)))

            return resume(())

        return wrapper

    return decorator


def sequence[S](steps: Iterable[Step[Any]], pure: Callable[[list[Any]], S]) -> S:
    """Folds steps into one step yielding the list of their values, in order."""

    def _append(collected: Any, step: Step[Any]) -> Any:
        return collected.bind(lambda values: step.map(lambda value: [*values, value]))

    return functools.reduce(_append, steps, pure([]))
