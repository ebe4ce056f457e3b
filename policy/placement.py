from __future__ import annotations
from enum import Enum
from typing import Dict, List, Optional, Union

from memory.errors import UnknownAlgorithm
from memory.segments import Hole

class Strategy(str, Enum):
    FIRST = 'F'
    BEST = 'B'
    WORST = 'W'

    @classmethod
    def parse(cls, symbol: Union[str, 'Strategy']) -> 'Strategy':
        # no case folding here: the command boundary already uppercased it
        if isinstance(symbol, Strategy):
            return symbol
        try:
            return cls(symbol)
        except ValueError:
            raise UnknownAlgorithm(symbol) from None

class FirstFitPolicy:
    """Lowest-addressed hole that is large enough."""
    def select(self, holes: List[Hole], size: int, max_hole: int) -> Optional[Hole]:
        for h in holes:
            if h.size >= size:
                return h
        return None

class BestFitPolicy:
    """Smallest sufficient hole; ties go to the lowest address."""
    def select(self, holes: List[Hole], size: int, max_hole: int) -> Optional[Hole]:
        best=None
        for h in holes:
            if h.size >= size and (best is None or h.size < best.size):
                best=h
        return best

class WorstFitPolicy:
    """First hole whose size equals the tracked ``max_hole``.

    ``max_hole`` is the value recorded at the last hole rebuild; it is not
    recomputed from ``holes`` here.
    """
    def select(self, holes: List[Hole], size: int, max_hole: int) -> Optional[Hole]:
        for h in holes:
            if h.size >= size and h.size == max_hole:
                return h
        return None

POLICIES: Dict[Strategy, object] = {
    Strategy.FIRST: FirstFitPolicy(),
    Strategy.BEST: BestFitPolicy(),
    Strategy.WORST: WorstFitPolicy(),
}
