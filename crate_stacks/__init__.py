"""crate_stacks replays crate moves against a fixed-width stack diagram."""
from .diagram import Arrangement, parse_diagram, render_diagram
from .engine import StackEngine, apply, transfer
from .errors import (
    CrateStackError,
    ExecutionError,
    InsufficientItems,
    InvalidStackIndex,
    MalformedInstruction,
    MissingLayout,
)
from .instructions import Instruction, parse_instruction, parse_instructions
from .modes import ExecutionMode
from .report import top_labels, top_of_each
from .runtime import parse_puzzle, run_puzzle, run_source

__all__ = [
    "Arrangement",
    "parse_diagram",
    "render_diagram",
    "Instruction",
    "parse_instruction",
    "parse_instructions",
    "ExecutionMode",
    "StackEngine",
    "apply",
    "transfer",
    "top_of_each",
    "top_labels",
    "parse_puzzle",
    "run_source",
    "run_puzzle",
    "CrateStackError",
    "ExecutionError",
    "MissingLayout",
    "MalformedInstruction",
    "InvalidStackIndex",
    "InsufficientItems",
]
