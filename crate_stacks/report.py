from __future__ import annotations

from typing import List, Optional

from .diagram import Arrangement


def top_of_each(arrangement: Arrangement) -> List[Optional[str]]:
    """Top label of every stack in index order; ``None`` marks an empty stack."""
    return [stack[-1] if stack else None for stack in arrangement]


def top_labels(arrangement: Arrangement) -> Optional[str]:
    """Concatenated top labels, or ``None`` as soon as one stack is empty."""
    tops = top_of_each(arrangement)
    if any(top is None for top in tops):
        return None
    return "".join(tops)  # type: ignore[arg-type]


def empty_stacks(arrangement: Arrangement) -> List[int]:
    return [index for index, top in enumerate(top_of_each(arrangement), start=1) if top is None]


__all__ = ["top_of_each", "top_labels", "empty_stacks"]
