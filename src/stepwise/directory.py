"""A people directory, the running example for optional and result chaining.

Looking up "the phone number of the manager of X" takes three steps, any
of which can come up empty: X may be unknown, X may have no manager, or the
manager may not be listed. ``manager_phone`` chains the steps with Maybe and
simply yields NOTHING; ``explain_manager_phone`` chains the same steps with
Result so the caller also learns which step failed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from stepwise.actions import attempt, read_text
from stepwise.errors import DirectoryError, LookupFailure, StepwiseError
from stepwise.maybe import from_optional
from stepwise.person import parse_person
from stepwise.result import Err, Ok

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping
    from pathlib import Path

    from stepwise.actions import IO
    from stepwise.maybe import Maybe
    from stepwise.person import Person
    from stepwise.result import Result

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Directory:
    people: Mapping[str, Person]

    @staticmethod
    def from_people(people: Iterable[Person]) -> Result[Directory, DirectoryError]:
        by_name: dict[str, Person] = {}
        for person in people:
            if person.name in by_name:
                return Err(DirectoryError(f"Duplicate entry for '{person.name}'"))
            by_name[person.name] = person
        return Ok(Directory(MappingProxyType(by_name)))

    def __len__(self) -> int:
        return len(self.people)

    def __iter__(self) -> Iterator[Person]:
        return iter(self.people.values())

    # -- Optional chaining ---------------------------------------------------

    def find(self, name: str) -> Maybe[Person]:
        return from_optional(self.people.get(name))

    def manager_of(self, person: Person) -> Maybe[Person]:
        return person.manager.bind(self.find)

    def manager_phone(self, name: str) -> Maybe[str]:
        return self.find(name).bind(self.manager_of).map(lambda manager: manager.phone)

    # -- Explained chaining --------------------------------------------------

    def require(self, name: str) -> Result[Person, LookupFailure]:
        return self.find(name).to_result(LookupFailure(f"No one named '{name}' in the directory", name=name))

    def require_manager(self, person: Person) -> Result[Person, LookupFailure]:
        missing = LookupFailure(f"'{person.name}' does not report to anyone", name=person.name)
        return person.manager.to_result(missing).bind(
            lambda manager: self.require(manager).map_err(
                lambda _: LookupFailure(
                    f"'{person.name}' reports to '{manager}', who is not in the directory", name=manager
                )
            )
        )

    def explain_manager_phone(self, name: str) -> Result[str, LookupFailure]:
        return self.require(name).bind(self.require_manager).map(lambda manager: manager.phone)


def parse_directory(text: str) -> Result[Directory, DirectoryError]:
    """Parses one person per line. Blank lines and ``#`` comments are skipped."""
    people: list[Person] = []
    first_seen: dict[str, int] = {}
    for number, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        match parse_person(line):
            case Err(error):
                return Err(DirectoryError(f"Line {number}: {error.describe()}", line=number))
            case Ok(person) if person.name in first_seen:
                return Err(
                    DirectoryError(
                        f"Line {number}: duplicate entry for '{person.name}'"
                        f" (first seen on line {first_seen[person.name]})",
                        line=number,
                    )
                )
            case Ok(person):
                first_seen[person.name] = number
                people.append(person)
    logger.debug("Parsed %d directory entries", len(people))
    return Directory.from_people(people)


def load_directory(path: Path) -> IO[Result[Directory, StepwiseError]]:
    """An action that reads path and parses it as a directory."""

    def _unreadable(error: Exception) -> StepwiseError:
        reason = error.strerror if isinstance(error, OSError) and error.strerror else str(error)
        return StepwiseError(f"Cannot read {path}: {reason}")

    def _parse(contents: Result[str, Exception]) -> Result[Directory, StepwiseError]:
        outcome = contents.map_err(_unreadable).bind(parse_directory)
        if isinstance(outcome, Ok):
            logger.info("Loaded %d people from %s", len(outcome.value), path)
        return outcome

    return attempt(read_text(path), OSError, UnicodeDecodeError).map(_parse)
