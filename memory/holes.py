from __future__ import annotations
from typing import List

from memory.segments import Hole, ProcessTable

class HoleTracker:
    """Free-space view derived from a ProcessTable.

    Always rebuilt from scratch after a mutation: the gaps between sorted
    segments are maximal by construction, so no merging is needed.
    """
    def __init__(self, capacity: int):
        self._holes: List[Hole] = [Hole(0, capacity-1)]
        self._max_hole = capacity

    @property
    def holes(self) -> List[Hole]:
        return list(self._holes)

    @property
    def max_hole(self) -> int:
        return self._max_hole

    def rebuild(self, table: ProcessTable, capacity: int):
        holes=[]
        prev=0
        for seg in table:
            if seg.begin > prev:
                holes.append(Hole(prev, seg.begin-1))
            prev = seg.end + 1
        if prev <= capacity-1:
            holes.append(Hole(prev, capacity-1))
        self._holes = holes
        self._max_hole = max((h.size for h in holes), default=0)
