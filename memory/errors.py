from __future__ import annotations

class AllocationError(Exception):
    """A rejected allocation request. The allocator state is left untouched."""

class InsufficientMemory(AllocationError):
    def __init__(self, requested: int, max_hole: int):
        self.requested = requested
        self.max_hole = max_hole
        super().__init__(f'requested={requested} > max_hole={max_hole}')

class UnknownAlgorithm(AllocationError):
    def __init__(self, symbol):
        self.symbol = symbol
        super().__init__(f'unknown placement strategy {symbol!r}')

class InvariantViolation(RuntimeError):
    """Internal consistency failure; never a user error."""
