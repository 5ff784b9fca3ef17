"""Fixed-width stack diagrams.

A diagram is a block of rows followed by an index-label row::

        [D]
    [N] [C]
    [Z] [M] [P]
     1   2   3

Every non-whitespace character of the label row anchors one stack at that
character column. Items are read at the same columns, bottom row first.
"""
from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Sequence, Tuple

from .errors import InvalidStackIndex, MissingLayout
from .utils import chunk


class Arrangement:
    """All stacks of a puzzle, addressed 1..N; each stack is stored bottom-first."""

    def __init__(self, stacks: Iterable[Iterable[str]] = ()):
        self.stacks: List[List[str]] = [list(stack) for stack in stacks]

    def __len__(self) -> int:
        return len(self.stacks)

    def __iter__(self) -> Iterator[List[str]]:
        return iter(self.stacks)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Arrangement):
            return self.stacks == other.stacks
        return NotImplemented

    def __repr__(self) -> str:
        body = ", ".join(f"{i}:{stack}" for i, stack in enumerate(self.stacks, start=1))
        return f"Arrangement({body})"

    def stack(self, index: int) -> List[str]:
        if not 1 <= index <= len(self.stacks):
            raise InvalidStackIndex(index, len(self.stacks))
        return self.stacks[index - 1]

    def heights(self) -> List[int]:
        return [len(stack) for stack in self.stacks]

    def as_tuples(self) -> Tuple[Tuple[str, ...], ...]:
        return tuple(tuple(stack) for stack in self.stacks)

    def copy(self) -> "Arrangement":
        return Arrangement(self.stacks)


def _layout_block(lines: Iterable[str]) -> List[str]:
    block: List[str] = []
    for line in lines:
        line = line.rstrip("\r\n")
        if not line.strip():
            break
        block.append(line)
    return block


def label_columns(label_row: str) -> Dict[int, int]:
    """Map each stack index (1-based, in emission order) to its character column."""
    columns: Dict[int, int] = {}
    for column, ch in enumerate(label_row):
        if not ch.isspace():
            columns[len(columns) + 1] = column
    return columns


def parse_diagram(lines: Iterable[str]) -> Arrangement:
    """Build the initial arrangement from the lines before the first blank line.

    Characters at an item column that are not alphabetic (including rows too
    short to reach the column) are read as "no item at this height".
    """
    block = _layout_block(lines)
    if not block:
        raise MissingLayout()
    *rows, label_row = block
    columns = label_columns(label_row)

    stacks: List[List[str]] = []
    for index in sorted(columns):
        column = columns[index]
        stack: List[str] = []
        for row in reversed(rows):
            if column < len(row) and row[column].isalpha():
                stack.append(row[column])
        stacks.append(stack)
    return Arrangement(stacks)


def render_diagram(arrangement: Arrangement, first_index: int = 1) -> List[str]:
    stacks: Sequence[List[str]] = arrangement.stacks
    height = max(arrangement.heights(), default=0)
    lines: List[str] = []
    for level in range(height - 1, -1, -1):
        cells = [f"[{stack[level]}]" if level < len(stack) else "   " for stack in stacks]
        lines.append(" ".join(cells).rstrip())
    labels = range(first_index, first_index + len(stacks))
    lines.append(" ".join(f"{index:^3}" for index in labels).rstrip())
    return lines


def render_panels(arrangement: Arrangement, per_row: int = 9) -> List[List[str]]:
    """Render wide arrangements as several diagrams of at most ``per_row`` stacks."""
    panels: List[List[str]] = []
    starts = range(1, len(arrangement) + 1, per_row)
    for first_index, group in zip(starts, chunk(arrangement.stacks, per_row)):
        panels.append(render_diagram(Arrangement(group), first_index=first_index))
    return panels


__all__ = ["Arrangement", "label_columns", "parse_diagram", "render_diagram", "render_panels"]
