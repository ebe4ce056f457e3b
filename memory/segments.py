from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, List

from memory.errors import InvariantViolation

@dataclass(frozen=True)
class Segment:
    owner: str
    begin: int
    end: int  # inclusive

    @property
    def size(self) -> int:
        return self.end - self.begin + 1

    def moved_to(self, begin: int) -> Segment:
        return Segment(self.owner, begin, begin + self.size - 1)

@dataclass(frozen=True)
class Hole:
    begin: int
    end: int  # inclusive

    @property
    def size(self) -> int:
        return self.end - self.begin + 1

class ProcessTable:
    """Allocated segments kept sorted by ``begin``.

    One owner may hold several disjoint segments; ``remove_all`` drops every
    one of them.
    """
    def __init__(self):
        self._segments: List[Segment] = []

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._segments)

    def __len__(self) -> int:
        return len(self._segments)

    def segments(self) -> List[Segment]:
        return list(self._segments)

    def insert(self, owner: str, begin: int, size: int) -> Segment:
        seg = Segment(owner, begin, begin + size - 1)
        i = 0
        while i < len(self._segments) and self._segments[i].begin <= seg.begin:
            i += 1
        prev = self._segments[i-1] if i > 0 else None
        nxt = self._segments[i] if i < len(self._segments) else None
        if (prev is not None and prev.end >= seg.begin) or (nxt is not None and seg.end >= nxt.begin):
            raise InvariantViolation(f'{seg} overlaps an allocated segment')
        self._segments.insert(i, seg)
        return seg

    def remove_all(self, owner: str) -> List[Segment]:
        removed = [s for s in self._segments if s.owner == owner]
        if removed:
            self._segments = [s for s in self._segments if s.owner != owner]
        return removed

    def replace(self, segments: List[Segment]):
        """Swap in a relocated segment list (same order, used by compaction)."""
        self._segments = list(segments)
