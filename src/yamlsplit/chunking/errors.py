"""Parser diagnostics surfaced while splitting a stream into documents."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class LocatedProblem:
    """A parser message with its location in the canonical stream."""

    description: str
    pos: Optional[int] = None
    line: int = 1  # 1-based
    column: int = 1  # 1-based

    def __str__(self) -> str:
        if self.line == 1 and self.column == 1 and self.pos is not None:
            return f"{self.description} at position {self.pos}"
        return f"{self.description} at line {self.line} column {self.column}"


class ParseError(ValueError):
    """The YAML parser rejected the stream."""

    def __init__(
        self,
        problem: Optional[LocatedProblem] = None,
        context: Optional[LocatedProblem] = None,
    ):
        self.problem = problem
        self.context = context
        super().__init__(self._format())

    @property
    def pos(self) -> Optional[int]:
        return self.problem.pos if self.problem else None

    def _format(self) -> str:
        if self.problem is None:
            return "unknown parser error"
        if self.context is None:
            return str(self.problem)
        return f"{self.problem}, {self.context}"
