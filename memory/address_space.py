from __future__ import annotations
from typing import Iterable, List, Optional

from memory.segments import Segment

FREE = '.'

class AddressSpace:
    """One cell per addressable unit, holding ``FREE`` or an owner symbol."""
    def __init__(self, capacity: int):
        if capacity <= 0:
            raise ValueError(f'capacity must be positive, got {capacity}')
        self.capacity = capacity
        self._cells: List[str] = [FREE]*capacity

    def mark(self, seg: Segment, owner: Optional[str]=None):
        ch = seg.owner if owner is None else owner
        for i in range(seg.begin, seg.end+1):
            self._cells[i] = ch

    def clear(self, seg: Segment):
        self.mark(seg, FREE)

    def reset(self, segments: Iterable[Segment]=()):
        self._cells = [FREE]*self.capacity
        for seg in segments:
            self.mark(seg)

    def render(self) -> str:
        return ''.join(self._cells)
