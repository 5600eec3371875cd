"""Parser combinators.

A ``Parser[T]`` wraps a function from input text to either a failure or a
pair of (produced value, remaining input). ``bind`` runs one parser, then
uses its value to choose the parser for the rest of the input; a failure at
any step ends the whole parse with that failure. Parsers are plain values:
they hold no state and can be run any number of times.

Failures carry the input that was left when they happened, so of two failed
alternatives the one that got further into the text is reported. When both
stopped at the same place their expectations are merged, which gives
messages such as ``unexpected 'x' (expected 'a' or 'b')``.
"""

from __future__ import annotations

import functools
import re
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from stepwise.errors import ParseError
from stepwise.maybe import NOTHING, Some
from stepwise.result import Err, Ok

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from stepwise.maybe import Maybe
    from stepwise.result import Result

type ParseResult[T] = Result[tuple[T, str], ParseError]


class Parser[T]:
    __slots__ = ("_run",)

    def __init__(self, run: Callable[[str], ParseResult[T]]) -> None:
        self._run = run

    @staticmethod
    def pure[U](value: U) -> Parser[U]:
        """A parser that yields value without consuming input."""
        return Parser(lambda text: Ok((value, text)))

    def parse(self, text: str) -> ParseResult[T]:
        """Runs the parser against text.

        Bound parsers are unwound with an explicit stack of pending
        continuations, so long chains do not grow the Python stack. A
        failure anywhere ends the parse, dropping whatever is still pending.
        """
        pending: list[Callable[[Any], Parser[Any]]] = []
        parser: Parser[Any] = self
        while True:
            while isinstance(parser, _Bound):
                pending.append(parser.continuation)
                parser = parser.source
            outcome = parser._run(text)
            if isinstance(outcome, Err) or not pending:
                return outcome
            value, text = outcome.value
            parser = pending.pop()(value)

    def parse_all(self, text: str) -> Result[T, ParseError]:
        """Parses text, requiring every character to be consumed.

        On failure the error's ``position`` is the offset into text at which
        parsing stopped.
        """
        match self.skip(eof()).parse(text):
            case Ok((value, _)):
                return Ok(value)
            case Err(error):
                return Err(replace(error, position=len(text) - len(error.remaining)))

    def bind[U](self, fn: Callable[[T], Parser[U]]) -> Parser[U]:
        return _Bound(self, fn)

    def map[U](self, fn: Callable[[T], U]) -> Parser[U]:
        return self.bind(lambda value: Parser.pure(fn(value)))

    def then[U](self, other: Parser[U]) -> Parser[U]:
        """Runs self then other, keeping other's value."""
        return self.bind(lambda _: other)

    def skip(self, other: Parser[object]) -> Parser[T]:
        """Runs self then other, keeping self's value."""
        return self.bind(lambda value: other.map(lambda _: value))

    def label(self, name: str) -> Parser[T]:
        """Reports name as the expectation when self fails without consuming input."""

        def _run(text: str) -> ParseResult[T]:
            match self.parse(text):
                case Err(error) if error.remaining == text:
                    return Err(replace(error, expected=(name,)))
                case outcome:
                    return outcome

        return Parser(_run)

    def or_else(self, other: Parser[T]) -> Parser[T]:
        """Tries other on the same input when self fails."""

        def _run(text: str) -> ParseResult[T]:
            first = self.parse(text)
            if isinstance(first, Ok):
                return first
            second = other.parse(text)
            if isinstance(second, Ok):
                return second
            return Err(_furthest(first.error, second.error))

        return Parser(_run)

    def __or__(self, other: Parser[T]) -> Parser[T]:
        return self.or_else(other)

    def __repr__(self) -> str:
        return f"Parser({self._run!r})"


class _Bound[S, T](Parser[T]):
    __slots__ = ("source", "continuation")

    def __init__(self, source: Parser[S], continuation: Callable[[S], Parser[T]]) -> None:
        self.source = source
        self.continuation = continuation

    def __repr__(self) -> str:
        return f"Parser({self.source!r} >>= {self.continuation!r})"


def _furthest(first: ParseError, second: ParseError) -> ParseError:
    if len(first.remaining) < len(second.remaining):
        return first
    if len(second.remaining) < len(first.remaining):
        return second
    merged = tuple(dict.fromkeys(first.expected + second.expected))
    return replace(first, expected=merged)


def _unexpected(text: str) -> str:
    return f"unexpected {text[0]!r}" if text else "unexpected end of input"


# -- Primitives --------------------------------------------------------------


def fail[T](message: str) -> Parser[T]:
    return Parser(lambda text: Err(ParseError(message, remaining=text)))


def satisfy(predicate: Callable[[str], bool], expected: str) -> Parser[str]:
    """Consumes one character if it satisfies predicate."""

    def _run(text: str) -> ParseResult[str]:
        if text and predicate(text[0]):
            return Ok((text[0], text[1:]))
        return Err(ParseError(_unexpected(text), remaining=text, expected=(expected,)))

    return Parser(_run)


def item() -> Parser[str]:
    return satisfy(lambda _: True, "any character")


def char(c: str) -> Parser[str]:
    return satisfy(lambda ch: ch == c, repr(c))


def literal(s: str) -> Parser[str]:
    def _run(text: str) -> ParseResult[str]:
        if text.startswith(s):
            return Ok((s, text[len(s) :]))
        return Err(ParseError(_unexpected(text), remaining=text, expected=(repr(s),)))

    return Parser(_run)


def pattern(regex: str | re.Pattern[str], expected: str | None = None) -> Parser[str]:
    """Consumes the text matched by regex at the start of the input."""
    compiled = re.compile(regex) if isinstance(regex, str) else regex
    description = expected or f"/{compiled.pattern}/"

    def _run(text: str) -> ParseResult[str]:
        m = compiled.match(text)
        if m is None:
            return Err(ParseError(_unexpected(text), remaining=text, expected=(description,)))
        return Ok((m.group(0), text[m.end() :]))

    return Parser(_run)


def eof() -> Parser[None]:
    def _run(text: str) -> ParseResult[None]:
        if text:
            return Err(ParseError(_unexpected(text), remaining=text, expected=("end of input",)))
        return Ok((None, text))

    return Parser(_run)


def spaces() -> Parser[str]:
    return pattern(r"\s*", "whitespace")


def token[T](p: Parser[T]) -> Parser[T]:
    """p followed by any amount of whitespace."""
    return p.skip(spaces())


# -- Combinators -------------------------------------------------------------


def many[T](p: Parser[T]) -> Parser[list[T]]:
    """Zero or more p.

    Stops at the first failure of p, or as soon as p succeeds without
    consuming input, so it always terminates.
    """

    def _run(text: str) -> ParseResult[list[T]]:
        values: list[T] = []
        rest = text
        while True:
            match p.parse(rest):
                case Ok((value, remaining)) if len(remaining) < len(rest):
                    values.append(value)
                    rest = remaining
                case _:
                    return Ok((values, rest))

    return Parser(_run)


def many1[T](p: Parser[T]) -> Parser[list[T]]:
    return p.bind(lambda first: many(p).map(lambda others: [first, *others]))


def sep_by[T](p: Parser[T], sep: Parser[object]) -> Parser[list[T]]:
    """Zero or more p separated by sep."""
    at_least_one = p.bind(lambda first: many(sep.then(p)).map(lambda others: [first, *others]))
    return at_least_one | Parser.pure([])


def optional[T](p: Parser[T]) -> Parser[Maybe[T]]:
    """p's value wrapped in Some, or NOTHING (consuming nothing) when p fails."""
    present: Parser[Maybe[T]] = p.map(Some)
    return present | Parser.pure(NOTHING)


def one_of[T](*parsers: Parser[T]) -> Parser[T]:
    """The first of parsers that succeeds."""
    if not parsers:
        raise ValueError("one_of requires at least one parser")
    return functools.reduce(Parser.or_else, parsers)


def choice_of(words: Iterable[str], *, ignore_case: bool = False) -> Parser[str]:
    """One of words, longest first; yields the text as written in the input."""
    ordered = sorted(words, key=len, reverse=True)
    if not ordered:
        raise ValueError("choice_of requires at least one word")
    flags = re.IGNORECASE if ignore_case else 0
    compiled = re.compile("|".join(re.escape(w) for w in ordered), flags)
    return pattern(compiled, " or ".join(repr(w) for w in ordered))
