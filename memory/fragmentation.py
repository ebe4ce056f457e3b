from __future__ import annotations
from dataclasses import dataclass
from typing import List
import math

from memory.segments import Hole

@dataclass(frozen=True)
class FragMetrics:
    """Free-space shape of an address space.

    ``lfe`` is the largest free extent. ``external_frag`` is the share of free
    units outside it (0 when everything free is in one hole). ``entropy`` is
    the Shannon entropy, in bits, of how free units spread over the holes.
    """
    hole_count: int
    total_free: int
    lfe: int
    external_frag: float
    entropy: float

    @classmethod
    def from_holes(cls, holes: List[Hole]) -> FragMetrics:
        if not holes:
            return cls(0, 0, 0, 0.0, 0.0)
        total = sum(h.size for h in holes)
        largest = max(h.size for h in holes)
        bits = 0.0
        for h in holes:
            share = h.size / total
            bits -= share * math.log2(share)
        return cls(len(holes), total, largest, (total - largest) / total, bits)

def compute_metrics(holes: List[Hole]) -> FragMetrics:
    return FragMetrics.from_holes(holes)
