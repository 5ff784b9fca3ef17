from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .engine import StackEngine
from .errors import ExecutionError
from .events import format_transfer
from .report import top_of_each

MAX_EVENT_LOG = 200


@dataclass
class _EngineState:
    engine: StackEngine
    failed: bool = False

    @property
    def halted(self) -> bool:
        return self.failed or self.engine.halted


class StepSession:
    """Interactive stepping over a StackEngine, shared by both visualizers.

    Keeps a copy of the initial arrangement so ``reset`` can replay from the
    start. Engine errors end the session with a status message.
    """

    def __init__(self, engine: StackEngine, max_steps: Optional[int] = None):
        self._initial = engine.arrangement.copy()
        self._instructions = list(engine.instructions)
        self._mode = engine.mode
        self.state = _EngineState(engine=engine)
        self.max_steps = max_steps
        self.auto_run = False
        self.event_log: List[str] = []
        self.message = "Press SPACE to run/pause, n to step, q to quit."

    @property
    def engine(self) -> StackEngine:
        return self.state.engine

    @property
    def halted(self) -> bool:
        return self.state.halted

    def advance(self, auto: bool = False) -> None:
        if self.state.halted:
            self.auto_run = False
            return
        if self.max_steps is not None and self.engine.pc >= self.max_steps:
            self.auto_run = False
            self.message = "Reached max steps; press r to reset or q to quit."
            return
        try:
            self.engine.step()
        except ExecutionError as exc:
            self.state.failed = True
            self.auto_run = False
            self.message = f"Error: {exc}"
            return
        self._consume_events()
        if self.engine.halted:
            self.auto_run = False
            self.message = "Halted. Press r to reset or q to quit."
        elif auto:
            self.message = "Running..."

    def toggle_auto(self) -> None:
        if self.state.halted:
            self.message = "Program halted. Press r to reset or q to quit."
            return
        self.auto_run = not self.auto_run
        self.message = "Running..." if self.auto_run else "Paused."

    def reset(self) -> None:
        engine = StackEngine(self._initial.copy(), self._instructions, self._mode)
        self.state = _EngineState(engine=engine)
        self.auto_run = False
        self.event_log.clear()
        self.message = "Reset. Press SPACE to run or n to step."

    def tops_line(self) -> str:
        return " ".join(top or "-" for top in top_of_each(self.engine.arrangement))

    def instruction_window(self, size: int) -> List[str]:
        """Instruction lines around the next one to apply, the cursor marked with an arrow."""
        instructions = self._instructions
        if not instructions:
            return ["<no instructions>"]
        pc = self.engine.pc
        start = max(0, min(pc, len(instructions) - 1) - size // 2)
        end = min(len(instructions), start + size)
        lines = []
        for idx in range(start, end):
            prefix = "→" if idx == pc else " "
            lines.append(f"{prefix}{idx:03d} {instructions[idx]}")
        return lines

    def _consume_events(self) -> None:
        for event in self.engine.drain_events():
            self.event_log.append(format_transfer(event))
        if len(self.event_log) > MAX_EVENT_LOG:
            self.event_log = self.event_log[-MAX_EVENT_LOG:]


__all__ = ["StepSession"]
