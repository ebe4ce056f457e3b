from __future__ import annotations
from memory.allocator import ContiguousAllocator

def render_map(alloc: ContiguousAllocator, width: int=0) -> str:
    """One character per unit; ``width`` > 0 bins the map down to that many columns."""
    cells=alloc.render()
    if width<=0 or width>=alloc.capacity:
        return cells
    cap=alloc.capacity
    buf=[]
    for i in range(width):
        s=int((i/width)*cap)
        e=max(s+1, int(((i+1)/width)*cap))
        chunk=cells[s:e].replace('.', '')
        buf.append(chunk[0] if chunk else '.')
    return ''.join(buf)
