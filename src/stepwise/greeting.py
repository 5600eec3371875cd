"""The IO example: ask for a name, then greet whoever answered."""

from __future__ import annotations

from typing import TYPE_CHECKING

from stepwise.actions import IO, read_line, write, write_line

if TYPE_CHECKING:
    from typing import TextIO

    from stepwise.config import ConsoleSettings


def greet(settings: ConsoleSettings, stdin: TextIO, stdout: TextIO) -> IO[str]:
    """Prompts on stdout, reads a name from stdin and greets it. Yields the name."""

    def _respond(name: str) -> IO[str]:
        name = name.strip()
        if not name:
            return write_line("Nobody there? Goodbye.", stdout).then(IO.pure(name))
        return write_line(settings.greeting.format(name=name), stdout).then(IO.pure(name))

    return write(settings.prompt, stdout).then(read_line(stdin)).bind(_respond)
