from __future__ import annotations

from typing import List, Sequence, TypeVar

T = TypeVar("T")


def chunk(sequence: Sequence[T], n: int) -> List[Sequence[T]]:
    """Split ``sequence`` into consecutive windows of ``n``; the last one may be shorter."""
    if n < 1:
        raise ValueError(f"chunk size must be at least 1, got {n}")
    return [sequence[start:start + n] for start in range(0, len(sequence), n)]


__all__ = ["chunk"]
