"""Sequencing steps with bind and return: Maybe, Result, IO and Parser."""

from stepwise.actions import IO
from stepwise.maybe import NOTHING, Maybe, Nothing, Some, from_optional
from stepwise.notation import do, sequence
from stepwise.parser import Parser
from stepwise.result import Err, Ok, Result, UnwrapError

__all__ = [
    "IO",
    "NOTHING",
    "Err",
    "Maybe",
    "Nothing",
    "Ok",
    "Parser",
    "Result",
    "Some",
    "UnwrapError",
    "do",
    "from_optional",
    "sequence",
]
