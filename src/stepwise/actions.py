"""IO actions: deferred effects that compose before they run.

Building or binding an ``IO`` performs nothing. The effect happens only when
``run()`` is called, and every call performs it again. Binding never
short-circuits: the first action always runs, and its value is handed to the
function that picks the second action.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from stepwise.result import from_call

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from pathlib import Path
    from typing import TextIO

    from stepwise.result import Result

logger = logging.getLogger(__name__)


class IO[T]:
    """A computation with side effects, wrapped so it can be sequenced."""

    __slots__ = ("_effect",)

    def __init__(self, effect: Callable[[], T]) -> None:
        self._effect = effect

    @staticmethod
    def pure[U](value: U) -> IO[U]:
        """An action that yields value and does nothing else."""
        return IO(lambda: value)

    def run(self) -> T:
        """Performs the action.

        Bound actions are unwound with an explicit stack of pending
        continuations, so a chain of any length runs in constant Python
        stack depth.
        """
        pending: list[Callable[[Any], IO[Any]]] = []
        action: IO[Any] = self
        while True:
            while isinstance(action, _Bound):
                pending.append(action.continuation)
                action = action.source
            value = action._effect()
            if not pending:
                return value
            action = pending.pop()(value)

    def bind[U](self, fn: Callable[[T], IO[U]]) -> IO[U]:
        """Runs self, passes its value to fn and runs the action fn returns."""
        return _Bound(self, fn)

    def map[U](self, fn: Callable[[T], U]) -> IO[U]:
        return self.bind(lambda value: IO.pure(fn(value)))

    def then[U](self, other: IO[U]) -> IO[U]:
        """Runs self, discards its value, then runs other."""
        return self.bind(lambda _: other)

    def __repr__(self) -> str:
        return f"IO({self._effect!r})"


class _Bound[S, T](IO[T]):
    __slots__ = ("source", "continuation")

    def __init__(self, source: IO[S], continuation: Callable[[S], IO[T]]) -> None:
        self.source = source
        self.continuation = continuation

    def __repr__(self) -> str:
        return f"IO({self.source!r} >>= {self.continuation!r})"


def read_line(stream: TextIO) -> IO[str]:
    """Reads one line, without its trailing newline. End of input raises EOFError."""

    def _read() -> str:
        line = stream.readline()
        if not line:
            raise EOFError("end of input")
        return line.rstrip("\r\n")

    return IO(_read)


def write(text: str, stream: TextIO) -> IO[None]:
    def _write() -> None:
        stream.write(text)
        stream.flush()

    return IO(_write)


def write_line(text: str, stream: TextIO) -> IO[None]:
    return write(text + "\n", stream)


def read_text(path: Path) -> IO[str]:
    def _read() -> str:
        logger.debug("Reading %s", path)
        return path.read_text(encoding="utf-8")

    return IO(_read)


def sequence_io[T](actions: Iterable[IO[T]]) -> IO[list[T]]:
    """One action running each of actions in order and collecting their values."""
    pending = list(actions)
    return IO(lambda: [action.run() for action in pending])


def attempt[T](action: IO[T], *catch: type[Exception]) -> IO[Result[T, Exception]]:
    """Runs action, capturing an exception of one of the ``catch`` types as an Err."""
    kinds = catch or (Exception,)
    return IO(lambda: from_call(action.run, catch=kinds))
