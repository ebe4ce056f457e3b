from __future__ import annotations
from typing import List, Union

from memory.address_space import AddressSpace
from memory.errors import InsufficientMemory, InvariantViolation
from memory.holes import HoleTracker
from memory.segments import Hole, ProcessTable, Segment
from memory.telemetrics import LOGGER
from policy.placement import POLICIES, Strategy

LOGGER = LOGGER.getChild('Allocator')

DEFAULT_CAPACITY = 80

class ContiguousAllocator:
    """Contiguous allocation over ``capacity`` units.

    Owns the address space, the process table and the hole tracker. Every
    mutation commits fully (cells, table, holes rebuilt) or raises before
    touching anything.
    """
    def __init__(self, capacity: int=DEFAULT_CAPACITY):
        self.capacity = capacity
        self.space = AddressSpace(capacity)
        self.table = ProcessTable()
        self.tracker = HoleTracker(capacity)

    @property
    def holes(self) -> List[Hole]:
        return self.tracker.holes

    @property
    def max_hole(self) -> int:
        return self.tracker.max_hole

    def segments(self) -> List[Segment]:
        return self.table.segments()

    def in_mem(self, owner: str) -> bool:
        return any(s.owner == owner for s in self.table)

    def used(self) -> int:
        return sum(s.size for s in self.table)

    def free_units(self) -> int:
        return self.capacity - self.used()

    def render(self) -> str:
        return self.space.render()

    def allocate(self, owner: str, size: int, strategy: Union[str, Strategy]=Strategy.FIRST) -> Segment:
        if size <= 0:
            raise ValueError(f'size must be positive, got {size}')
        if size > self.tracker.max_hole:
            LOGGER.info(f'reject {owner}: size={size} > max_hole={self.tracker.max_hole}')
            raise InsufficientMemory(size, self.tracker.max_hole)
        strat = Strategy.parse(strategy)
        hole = POLICIES[strat].select(self.tracker.holes, size, self.tracker.max_hole)
        if hole is None:
            raise InvariantViolation(
                f'{strat.name.lower()}-fit found no hole for size={size} with max_hole={self.tracker.max_hole}')
        return self._commit(owner, hole.begin, size)

    def _commit(self, owner: str, begin: int, size: int) -> Segment:
        seg = self.table.insert(owner, begin, size)
        self.space.mark(seg)
        self.tracker.rebuild(self.table, self.capacity)
        LOGGER.debug(f'alloc {owner}:[{seg.begin},{seg.end}] max_hole={self.tracker.max_hole}')
        return seg

    def release(self, owner: str) -> List[Segment]:
        removed = self.table.remove_all(owner)
        if not removed:
            return removed
        for seg in removed:
            self.space.clear(seg)
        self.tracker.rebuild(self.table, self.capacity)
        LOGGER.debug(f'free {owner}: {len(removed)} segment(s), max_hole={self.tracker.max_hole}')
        return removed

    def compact(self) -> int:
        """Slide every segment, in address order, down to address 0.

        Returns the number of units that changed position.
        """
        moved=0
        cursor=0
        relocated=[]
        for seg in self.table:
            if seg.begin != cursor:
                moved += seg.size
            relocated.append(seg.moved_to(cursor))
            cursor += seg.size
        self.table.replace(relocated)
        self.space.reset(relocated)
        self.tracker.rebuild(self.table, self.capacity)
        LOGGER.debug(f'compact: moved={moved} max_hole={self.tracker.max_hole}')
        return moved

    def check_invariants(self):
        segs = self.table.segments()
        for a, b in zip(segs, segs[1:]):
            if a.end >= b.begin:
                raise InvariantViolation(f'{a} and {b} overlap or are out of order')
        holes = self.tracker.holes
        for a, b in zip(holes, holes[1:]):
            if a.end + 1 >= b.begin:
                raise InvariantViolation(f'{a} and {b} are not maximal')
        if sum(s.size for s in segs) + sum(h.size for h in holes) != self.capacity:
            raise InvariantViolation('segments and holes do not cover the address space')
        if self.tracker.max_hole != max((h.size for h in holes), default=0):
            raise InvariantViolation('max_hole is stale')
