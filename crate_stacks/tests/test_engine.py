from __future__ import annotations

import pytest

from crate_stacks.diagram import Arrangement, parse_diagram
from crate_stacks.engine import StackEngine, apply, transfer
from crate_stacks.errors import InsufficientItems, InvalidStackIndex
from crate_stacks.instructions import Instruction, parse_instruction
from crate_stacks.modes import ExecutionMode
from crate_stacks.report import top_labels

DIAGRAM = [
    "    [D]",
    "[N] [C]",
    "[Z] [M] [P]",
    " 1   2   3",
]
MOVES = [
    "move 1 from 2 to 1",
    "move 3 from 1 to 3",
    "move 2 from 2 to 1",
    "move 1 from 1 to 2",
]


def _run(mode: ExecutionMode) -> Arrangement:
    arrangement = parse_diagram(DIAGRAM)
    apply(arrangement, [parse_instruction(line) for line in MOVES], mode)
    return arrangement


def test_single_transfer_canonical_run():
    arrangement = _run(ExecutionMode.SINGLE)
    assert arrangement.stacks == [["C"], ["M"], ["P", "D", "N", "Z"]]
    assert top_labels(arrangement) == "CMZ"


def test_block_transfer_canonical_run():
    arrangement = _run(ExecutionMode.BLOCK)
    assert arrangement.stacks == [["M"], ["C"], ["P", "Z", "N", "D"]]
    assert top_labels(arrangement) == "MCD"


@pytest.mark.parametrize("mode", list(ExecutionMode))
def test_self_transfer_is_a_no_op(mode):
    arrangement = Arrangement([["A", "B", "C"], ["D"]])
    apply(arrangement, [Instruction(3, 1, 1), Instruction(1, 2, 2)], mode)
    assert arrangement.stacks == [["A", "B", "C"], ["D"]]


def test_single_transfer_reverses_and_reverse_move_restores():
    arrangement = Arrangement([["A", "B", "C"], []])
    apply(arrangement, [Instruction(3, 1, 2)], ExecutionMode.SINGLE)
    assert arrangement.stacks == [[], ["C", "B", "A"]]
    apply(arrangement, [Instruction(3, 2, 1)], ExecutionMode.SINGLE)
    assert arrangement.stacks == [["A", "B", "C"], []]


def test_block_transfer_preserves_order():
    arrangement = Arrangement([["A", "B", "C"], ["X"]])
    apply(arrangement, [Instruction(2, 1, 2)], ExecutionMode.BLOCK)
    assert arrangement.stacks == [["A"], ["X", "B", "C"]]


@pytest.mark.parametrize("mode", list(ExecutionMode))
def test_insufficient_items_never_removes_anything(mode):
    arrangement = Arrangement([["A", "B"], ["X"]])
    with pytest.raises(InsufficientItems) as excinfo:
        apply(arrangement, [Instruction(3, 1, 2)], mode)
    assert arrangement.stacks == [["A", "B"], ["X"]]
    assert excinfo.value.requested == 3
    assert excinfo.value.available == 2
    assert excinfo.value.step == 0


def test_invalid_stack_index():
    arrangement = parse_diagram(DIAGRAM)
    with pytest.raises(InvalidStackIndex) as excinfo:
        apply(arrangement, [parse_instruction("move 2 from 9 to 1")], ExecutionMode.SINGLE)
    assert excinfo.value.index == 9
    assert str(excinfo.value.instruction) == "move 2 from 9 to 1"
    assert arrangement == parse_diagram(DIAGRAM)


def test_invalid_target_is_checked_before_source_is_touched():
    arrangement = Arrangement([["A"], ["B"]])
    with pytest.raises(InvalidStackIndex):
        apply(arrangement, [Instruction(1, 1, 3)], ExecutionMode.BLOCK)
    assert arrangement.stacks == [["A"], ["B"]]


def test_failure_keeps_earlier_transfers():
    arrangement = Arrangement([["A", "B"], []])
    instructions = [Instruction(1, 1, 2), Instruction(5, 1, 2, line=7), Instruction(1, 1, 2)]
    with pytest.raises(InsufficientItems) as excinfo:
        apply(arrangement, instructions, ExecutionMode.SINGLE)
    assert arrangement.stacks == [["A"], ["B"]]
    assert excinfo.value.step == 1
    assert str(excinfo.value).startswith("line 7: cannot move 5 item(s)")


def test_engine_steps_and_buffers_events():
    engine = StackEngine(parse_diagram(DIAGRAM), [parse_instruction(line) for line in MOVES], ExecutionMode.BLOCK)
    first = engine.step()
    assert first is not None
    assert first.step == 0
    assert first.moved == ("D",)
    assert engine.pc == 1
    assert not engine.halted

    engine.run()
    assert engine.halted
    assert engine.step() is None
    events = engine.drain_events()
    assert [e.step for e in events] == [0, 1, 2, 3]
    assert events[1].moved == ("Z", "N", "D")
    assert engine.drain_events() == []

    snapshot = engine.snapshot_state()
    assert snapshot.halted
    assert snapshot.step == 4
    assert snapshot.stacks == (("M",), ("C",), ("P", "Z", "N", "D"))


def test_transfer_primitive_reports_moved_labels():
    source, target = ["A", "B", "C"], []
    assert transfer(source, target, 2, ExecutionMode.SINGLE) == ("C", "B")
    assert source == ["A"]
    with pytest.raises(InsufficientItems):
        transfer(source, target, 2, ExecutionMode.BLOCK)
