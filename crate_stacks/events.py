from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .instructions import Instruction
from .modes import ExecutionMode


@dataclass(frozen=True)
class TransferApplied:
    """One applied instruction; ``moved`` lists the labels as they now sit on the target, bottom-first."""

    step: int
    instruction: Instruction
    mode: ExecutionMode
    moved: Tuple[str, ...]


@dataclass(frozen=True)
class EngineSnapshot:
    step: int
    stacks: Tuple[Tuple[str, ...], ...]
    halted: bool


def format_transfer(event: TransferApplied) -> str:
    moved = "".join(event.moved)
    return f"#{event.step} {event.instruction} [{event.mode.value}] moved={moved}"


__all__ = ["TransferApplied", "EngineSnapshot", "format_transfer"]
