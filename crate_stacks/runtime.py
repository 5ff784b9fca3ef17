from __future__ import annotations

import logging
import pathlib
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .diagram import Arrangement, parse_diagram
from .engine import StackEngine
from .events import TransferApplied
from .instructions import Instruction, parse_instructions
from .modes import ExecutionMode
from .report import top_labels, top_of_each

logger = logging.getLogger(__name__)


@dataclass
class Puzzle:
    arrangement: Arrangement
    instructions: List[Instruction]


@dataclass
class RunResult:
    mode: ExecutionMode
    arrangement: Arrangement
    tops: List[Optional[str]]
    label: Optional[str]
    events: List[TransferApplied] = field(default_factory=list)


def split_sections(text: str) -> Tuple[List[str], List[str], int]:
    """Split puzzle text at the first blank line.

    Returns the diagram lines, the instruction lines and the 1-based line
    number of the first instruction line.
    """
    lines = text.splitlines()
    for index, line in enumerate(lines):
        if not line.strip():
            return lines[:index], lines[index + 1:], index + 2
    return lines, [], len(lines) + 1


def parse_puzzle(text: str) -> Puzzle:
    diagram_lines, instruction_lines, first_line = split_sections(text)
    arrangement = parse_diagram(diagram_lines)
    instructions = parse_instructions(instruction_lines, first_line=first_line)
    logger.info("parsed %d stack(s) and %d instruction(s)", len(arrangement), len(instructions))
    return Puzzle(arrangement, instructions)


def prepare_engine(text: str, mode: ExecutionMode = ExecutionMode.SINGLE) -> StackEngine:
    puzzle = parse_puzzle(text)
    return StackEngine(puzzle.arrangement, puzzle.instructions, mode)


def run_source(text: str, mode: ExecutionMode = ExecutionMode.SINGLE) -> RunResult:
    """Parse ``text`` from scratch and replay it in ``mode``."""
    engine = prepare_engine(text, mode)
    arrangement = engine.run()
    return RunResult(
        mode=mode,
        arrangement=arrangement,
        tops=top_of_each(arrangement),
        label=top_labels(arrangement),
        events=engine.drain_events(),
    )


def read_puzzle(path: str) -> str:
    return pathlib.Path(path).read_text(encoding="utf-8")


def run_puzzle(path: str, mode: ExecutionMode = ExecutionMode.SINGLE) -> RunResult:
    return run_source(read_puzzle(path), mode)


__all__ = [
    "Puzzle",
    "RunResult",
    "split_sections",
    "parse_puzzle",
    "prepare_engine",
    "run_source",
    "read_puzzle",
    "run_puzzle",
]
