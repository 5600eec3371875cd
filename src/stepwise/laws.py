"""Monad law checks.

Every step type in this package promises the three laws below. A check runs
both sides of each law on sample values and compares what it observes.

1. Left identity: ``pure(a).bind(f)`` behaves like ``f(a)``.
2. Right identity: ``m.bind(pure)`` behaves like ``m``.
3. Associativity: ``m.bind(f).bind(g)`` behaves like ``m.bind(lambda x: f(x).bind(g))``.

Steps that describe a computation rather than hold a result (IO, Parser)
cannot be compared directly, so each check takes an ``observe`` function
turning a step into something comparable: the value and effects of running
an action, or the outcomes of a parser on a fixed set of inputs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from stepwise.actions import IO
from stepwise.errors import StepwiseError
from stepwise.maybe import NOTHING, Some
from stepwise.parser import Parser, char, fail, item, literal
from stepwise.result import Err, Ok

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from stepwise.maybe import Maybe
    from stepwise.result import Result

logger = logging.getLogger(__name__)

LEFT_IDENTITY = "left identity"
RIGHT_IDENTITY = "right identity"
ASSOCIATIVITY = "associativity"


@dataclass(frozen=True)
class LawCheck:
    law: str
    passed: bool
    detail: str = ""


@dataclass(frozen=True)
class LawReport:
    step_type: str
    checks: tuple[LawCheck, ...]

    @property
    def passed(self) -> bool:
        return all(check.passed for check in self.checks)


def _identity(step: Any) -> Any:
    return step


def _first_mismatch(pairs: Sequence[tuple[str, Any, Any]]) -> str:
    for label, left, right in pairs:
        if left != right:
            return f"{label}: {left!r} != {right!r}"
    return ""


def check_laws(
    step_type: str,
    pure: Callable[[Any], Any],
    f: Callable[[Any], Any],
    g: Callable[[Any], Any],
    samples: Sequence[Any],
    steps: Sequence[Any],
    observe: Callable[[Any], Any] = _identity,
) -> LawReport:
    """Checks the monad laws for one step type.

    Args:
        step_type: Name used in the report.
        pure: The lifting function of the step type.
        f: A function from a sample value to a step.
        g: A function from f's values to a step.
        samples: Plain values used for left identity.
        steps: Steps used for right identity and associativity.
        observe: Turns a step into a comparable value.
    """
    left = [(f"a={a!r}", observe(pure(a).bind(f)), observe(f(a))) for a in samples]
    right = [(f"m={m!r}", observe(m.bind(pure)), observe(m)) for m in steps]
    assoc = [
        (f"m={m!r}", observe(m.bind(f).bind(g)), observe(m.bind(lambda x: f(x).bind(g))))
        for m in steps
    ]

    checks = []
    for law, pairs in ((LEFT_IDENTITY, left), (RIGHT_IDENTITY, right), (ASSOCIATIVITY, assoc)):
        detail = _first_mismatch(pairs)
        checks.append(LawCheck(law=law, passed=not detail, detail=detail))
        logger.debug("%s %s: %s", step_type, law, "ok" if not detail else detail)
    return LawReport(step_type=step_type, checks=tuple(checks))


# -- Built-in samples --------------------------------------------------------


def _maybe_report() -> LawReport:
    def f(x: int) -> Maybe[int]:
        return Some(x + 1) if x > 0 else NOTHING

    def g(x: int) -> Maybe[int]:
        return Some(x * 2) if x % 2 == 0 else NOTHING

    return check_laws("Maybe", Some, f, g, samples=[-1, 0, 3, 4], steps=[Some(3), Some(-2), NOTHING])


def _result_report() -> LawReport:
    def f(x: int) -> Result[int, StepwiseError]:
        return Ok(x + 1) if x >= 0 else Err(StepwiseError(f"{x} is negative"))

    def g(x: int) -> Result[int, StepwiseError]:
        return Ok(x // 2) if x % 2 == 0 else Err(StepwiseError(f"{x} is odd"))

    steps = [Ok(1), Ok(2), Ok(-5), Err(StepwiseError("boom"))]
    return check_laws("Result", Ok, f, g, samples=[-1, 1, 2], steps=steps)


def _io_report() -> LawReport:
    effects: list[str] = []

    def record(label: str, value: int) -> IO[int]:
        def _effect() -> int:
            effects.append(label)
            return value

        return IO(_effect)

    def observe(action: IO[Any]) -> tuple[Any, tuple[str, ...]]:
        effects.clear()
        value = action.run()
        return value, tuple(effects)

    def f(x: int) -> IO[int]:
        return record(f"f({x})", x + 1)

    def g(x: int) -> IO[int]:
        return record(f"g({x})", x * 10)

    steps = [record("m", 7), IO.pure(0)]
    return check_laws("IO", IO.pure, f, g, samples=[1, 2], steps=steps, observe=observe)


def _parser_report() -> LawReport:
    inputs = ("aa", "aA", "ab", "bB", "", "b")

    def observe(parser: Parser[Any]) -> tuple[Any, ...]:
        return tuple(parser.parse(text) for text in inputs)

    def f(c: str) -> Parser[str]:
        return char(c)

    def g(c: str) -> Parser[str]:
        return literal(c.upper()) | Parser.pure(c)

    steps: list[Parser[Any]] = [item(), char("a"), fail("no input wanted")]
    return check_laws("Parser", Parser.pure, f, g, samples=["a", "b"], steps=steps, observe=observe)


def standard_reports() -> list[LawReport]:
    """Law reports for every step type, on built-in samples."""
    return [_maybe_report(), _result_report(), _io_report(), _parser_report()]
