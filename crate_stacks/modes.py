from __future__ import annotations

from enum import Enum


class ExecutionMode(Enum):
    SINGLE = "single"  # one item per pop, moved items land reversed
    BLOCK = "block"    # contiguous block, order preserved

    @classmethod
    def parse(cls, name: str) -> "ExecutionMode":
        try:
            return cls(name.strip().lower())
        except ValueError:
            choices = ", ".join(mode.value for mode in cls)
            raise ValueError(f"Unknown execution mode {name!r} (expected one of: {choices})") from None


__all__ = ["ExecutionMode"]
