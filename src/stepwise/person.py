"""Person records, parsed one per line.

    "Ada Lovelace" employee 555-010-2030 reports-to "Charles Babbage"

Each field has its own parser and ``person_parser`` strings them together.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from stepwise.maybe import NOTHING, Some
from stepwise.notation import do
from stepwise.parser import (
    Parser,
    char,
    choice_of,
    fail,
    literal,
    many,
    one_of,
    optional,
    pattern,
    satisfy,
    spaces,
)

if TYPE_CHECKING:
    from collections.abc import Generator

    from stepwise.errors import ParseError
    from stepwise.maybe import Maybe
    from stepwise.result import Result


class PersonKind(StrEnum):
    EMPLOYEE = "employee"
    CONTRACTOR = "contractor"
    CUSTOMER = "customer"


@dataclass(frozen=True)
class Person:
    name: str
    kind: PersonKind
    phone: str
    manager: Maybe[str] = NOTHING


# -- Field parsers -----------------------------------------------------------

_escaped = char("\\").then(one_of(char('"'), char("\\")))
_unescaped = satisfy(lambda ch: ch not in '"\\\n', "string character")


def _non_blank(text: str) -> Parser[str]:
    stripped = text.strip()
    if not stripped:
        return fail("name must not be blank")
    return Parser.pure(stripped)


string_parser: Parser[str] = (
    char('"')
    .then(many(_escaped | _unescaped))
    .skip(char('"'))
    .map("".join)
    .label("quoted string")
    .bind(_non_blank)
)

person_kind_parser: Parser[PersonKind] = choice_of([kind.value for kind in PersonKind], ignore_case=True).map(
    lambda word: PersonKind(word.lower())
)


def _digits(count: int) -> Parser[str]:
    return pattern(rf"\d{{{count}}}", f"{count} digits")


def _separated_phone(sep: str) -> Parser[str]:
    return _digits(3).bind(
        lambda area: char(sep)
        .then(_digits(3))
        .bind(lambda exchange: char(sep).then(_digits(4)).map(lambda line: f"{area}-{exchange}-{line}"))
    )


_parenthesized_phone = (
    char("(")
    .then(_digits(3))
    .skip(char(")"))
    .skip(pattern(r" ?"))
    .bind(
        lambda area: _digits(3)
        .skip(char("-"))
        .bind(lambda exchange: _digits(4).map(lambda line: f"{area}-{exchange}-{line}"))
    )
)

phone_parser: Parser[str] = (_separated_phone("-") | _separated_phone(".") | _parenthesized_phone).label("phone number")


# -- Record parser -----------------------------------------------------------

_gap = pattern(r"[ \t]+", "whitespace")
_reports_to = _gap.then(literal("reports-to"))


@do(Parser.pure)
def _person() -> Generator[Parser[Any], Any, Person]:
    name = yield string_parser
    yield _gap
    kind = yield person_kind_parser
    yield _gap
    phone = yield phone_parser
    # Once the keyword is read the manager is required.
    clause = yield optional(_reports_to)
    manager: Maybe[str] = NOTHING
    if clause.is_some():
        manager = Some((yield _gap.then(string_parser)))
    return Person(name=name, kind=kind, phone=phone, manager=manager)


person_parser: Parser[Person] = _person()


def parse_person(line: str) -> Result[Person, ParseError]:
    """Parses a whole line; surrounding whitespace is ignored."""
    return spaces().then(person_parser).skip(spaces()).parse_all(line)


def format_person(person: Person) -> str:
    """Renders person back into the line format parse_person accepts."""
    line = f"{_quote(person.name)} {person.kind.value} {person.phone}"
    match person.manager:
        case Some(manager):
            return f"{line} reports-to {_quote(manager)}"
        case _:
            return line


def _quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
