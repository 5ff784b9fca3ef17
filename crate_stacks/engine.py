from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from .diagram import Arrangement
from .errors import ExecutionError, InsufficientItems
from .events import EngineSnapshot, TransferApplied
from .instructions import Instruction
from .modes import ExecutionMode

logger = logging.getLogger(__name__)


def transfer(source: List[str], target: List[str], quantity: int, mode: ExecutionMode) -> Tuple[str, ...]:
    """Move the top ``quantity`` items of ``source`` onto ``target``.

    The size check happens before anything is removed, so a failing transfer
    leaves both stacks untouched. Returns the moved labels in the order they
    now sit on ``target``, bottom-first.
    """
    if quantity > len(source):
        raise InsufficientItems(quantity, len(source))
    cut = len(source) - quantity
    if source is target:
        return tuple(source[cut:])
    block = source[cut:]
    del source[cut:]
    if mode is ExecutionMode.SINGLE:
        # popping one at a time lands the items upside down
        block.reverse()
    target.extend(block)
    return tuple(block)


class StackEngine:
    """Replays instructions against an arrangement it owns for the run.

    ``step`` applies one instruction, ``run`` applies all that remain. A
    failing instruction raises and leaves ``pc`` pointing at it; earlier
    transfers stay applied.
    """

    def __init__(
        self,
        arrangement: Arrangement,
        instructions: Iterable[Instruction],
        mode: ExecutionMode = ExecutionMode.SINGLE,
        *,
        record_events: bool = True,
    ):
        self.arrangement = arrangement
        self.instructions: List[Instruction] = list(instructions)
        self.mode = mode
        self.pc = 0
        self.record_events = record_events
        self._event_buffer: List[TransferApplied] = []

    @property
    def halted(self) -> bool:
        return self.pc >= len(self.instructions)

    def step(self) -> Optional[TransferApplied]:
        if self.halted:
            return None
        instruction = self.instructions[self.pc]
        try:
            source = self.arrangement.stack(instruction.source)
            target = self.arrangement.stack(instruction.target)
            moved = transfer(source, target, instruction.quantity, self.mode)
        except ExecutionError as exc:
            if exc.instruction is None:
                exc.instruction = instruction
            exc.step = self.pc
            raise
        event = TransferApplied(step=self.pc, instruction=instruction, mode=self.mode, moved=moved)
        logger.debug("step %d: %s [%s] moved %s", self.pc, instruction, self.mode.value, "".join(moved))
        if self.record_events:
            self._event_buffer.append(event)
        self.pc += 1
        return event

    def run(self) -> Arrangement:
        while not self.halted:
            self.step()
        return self.arrangement

    def drain_events(self) -> List[TransferApplied]:
        events = list(self._event_buffer)
        self._event_buffer.clear()
        return events

    def snapshot_state(self) -> EngineSnapshot:
        return EngineSnapshot(step=self.pc, stacks=self.arrangement.as_tuples(), halted=self.halted)


def apply(arrangement: Arrangement, instructions: Iterable[Instruction], mode: ExecutionMode) -> None:
    StackEngine(arrangement, instructions, mode, record_events=False).run()


__all__ = ["StackEngine", "apply", "transfer"]
