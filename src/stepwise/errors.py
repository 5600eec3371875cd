from dataclasses import dataclass


@dataclass(frozen=True)
class StepwiseError:
    message: str


@dataclass(frozen=True)
class ParseError(StepwiseError):
    remaining: str = ""
    expected: tuple[str, ...] = ()
    position: int | None = None

    def describe(self) -> str:
        where = f" at offset {self.position}" if self.position is not None else ""
        if self.expected:
            return f"{self.message}{where} (expected {' or '.join(self.expected)})"
        return f"{self.message}{where}"


@dataclass(frozen=True)
class LookupFailure(StepwiseError):
    name: str


@dataclass(frozen=True)
class DirectoryError(StepwiseError):
    line: int | None = None
