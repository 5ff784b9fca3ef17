from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .instructions import Instruction


class CrateStackError(ValueError):
    """Base class for every failure raised while parsing or replaying a puzzle."""


class MissingLayout(CrateStackError):
    """Raised when the diagram has no index-label line to anchor stack columns."""

    def __init__(self, message: str = "Missing initial stack layout before the blank separator"):
        super().__init__(message)


class MalformedInstruction(CrateStackError):
    def __init__(self, text: str, line: Optional[int] = None, reason: str = "does not match 'move <n> from <a> to <b>'"):
        self.text = text
        self.line = line
        self.reason = reason
        location = f"line {line}: " if line is not None else ""
        super().__init__(f"{location}malformed instruction {text!r} ({reason})")


class ExecutionError(CrateStackError):
    """Raised by the engine; remembers the instruction and step that failed."""

    def __init__(self, message: str, instruction: Optional["Instruction"] = None):
        self.instruction = instruction
        self.step: Optional[int] = None
        super().__init__(message)

    def __str__(self) -> str:
        message = super().__str__()
        if self.instruction is None:
            return message
        if self.instruction.line is not None:
            return f"line {self.instruction.line}: {message} in '{self.instruction}'"
        if self.step is not None:
            return f"step {self.step}: {message} in '{self.instruction}'"
        return f"{message} in '{self.instruction}'"


class InvalidStackIndex(ExecutionError):
    def __init__(self, index: int, count: int, instruction: Optional["Instruction"] = None):
        self.index = index
        self.count = count
        super().__init__(f"stack {index} does not exist (valid range is 1..{count})", instruction)


class InsufficientItems(ExecutionError):
    def __init__(self, requested: int, available: int, instruction: Optional["Instruction"] = None):
        self.requested = requested
        self.available = available
        super().__init__(f"cannot move {requested} item(s), source stack holds {available}", instruction)


__all__ = [
    "CrateStackError",
    "MissingLayout",
    "MalformedInstruction",
    "ExecutionError",
    "InvalidStackIndex",
    "InsufficientItems",
]
