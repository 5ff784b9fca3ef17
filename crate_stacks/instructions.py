from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .errors import MalformedInstruction

INSTRUCTION_PATTERN = re.compile(r"move (?P<quantity>\d+) from (?P<source>\d+) to (?P<target>\d+)")


@dataclass(frozen=True)
class Instruction:
    """Move ``quantity`` items from stack ``source`` to stack ``target`` (both 1-based)."""

    quantity: int
    source: int
    target: int
    line: Optional[int] = field(default=None, compare=False)

    def __str__(self) -> str:
        return f"move {self.quantity} from {self.source} to {self.target}"


def parse_instruction(text: str, line: Optional[int] = None) -> Instruction:
    match = INSTRUCTION_PATTERN.fullmatch(text.strip())
    if match is None:
        raise MalformedInstruction(text, line)
    quantity = int(match.group("quantity"))
    if quantity < 1:
        raise MalformedInstruction(text, line, reason="quantity must be at least 1")
    return Instruction(
        quantity=quantity,
        source=int(match.group("source")),
        target=int(match.group("target")),
        line=line,
    )


def parse_instructions(lines: Iterable[str], first_line: int = 1) -> List[Instruction]:
    """Parse an instruction section; blank lines are skipped but still counted."""
    instructions: List[Instruction] = []
    for offset, text in enumerate(lines):
        if not text.strip():
            continue
        instructions.append(parse_instruction(text, line=first_line + offset))
    return instructions


__all__ = ["INSTRUCTION_PATTERN", "Instruction", "parse_instruction", "parse_instructions"]
