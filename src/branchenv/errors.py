# errors.py
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class BranchEnvError(Exception):
    """
    Structured error with enough context for:
      - a single-line ::error:: annotation
      - debug output without full tracebacks
    """
    kind: str
    message: str
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        return self.message


class ParseError(BranchEnvError):
    """A multi-line variable block has a line that is not `pattern:value`."""

    def __init__(self, variable: str, line: str):
        super().__init__(
            kind="parse_error",
            message=f"Invalid value for {variable}: {line} does not contain a colon",
            details={"variable": variable, "line": line},
        )
        self.variable = variable
        self.line = line
