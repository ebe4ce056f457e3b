"""
Contiguous Allocation Simulator - Visualizer

Replays a command script and draws a Matplotlib heatmap of the address space
over time: one row per command, one column per address unit, colored by owner.
Compactions are marked as horizontal lines.

How to run (recommended, from repo root):
    python -m tools.visualize_fragmentation --script scripts/demo.txt --out out_fragmentation.png

Notes:
- Only Allocate/Free/Compact change the picture. Show and Read lines in
  the script are skipped, so nested scripts are not followed. Exit ends the
  replay, as it ends a simulator session.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure repo root is on sys.path when running as a script:
# (python -m tools.visualize_fragmentation already works without this,
#  but this makes `python tools/visualize_fragmentation.py ...` work too.)
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

import numpy as np
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from control.commands import normalize, parse
from memory.allocator import ContiguousAllocator
from memory.errors import AllocationError
from memory.fragmentation import compute_metrics


def load_commands(path: str):
    """Yield parsed commands from a script, skipping blank lines."""
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        for line in f:
            cmd = parse(normalize(line.rstrip("\r\n")))
            if cmd is not None:
                yield cmd


def render_state(alloc: ContiguousAllocator, owner_ids: dict[str, int]) -> np.ndarray:
    """
    Return a 1D occupancy row over the address space.
    0 = free; otherwise the 1-based index of the owner in order of first appearance.
    """
    row = np.zeros(alloc.capacity, dtype=np.float32)
    for seg in alloc.segments():
        idx = owner_ids.setdefault(seg.owner, len(owner_ids) + 1)
        row[seg.begin : seg.end + 1] = idx
    return row


def replay(script: str, capacity: int) -> tuple[ContiguousAllocator, np.ndarray, list[int], int]:
    """Apply the script's A/F/C commands up to the first Exit; returns (allocator, frames, compaction rows, failures)."""
    alloc = ContiguousAllocator(capacity)
    owner_ids: dict[str, int] = {}
    frames: list[np.ndarray] = []
    compact_marks: list[int] = []
    failures = 0

    for cmd in load_commands(script):
        if cmd.action == "allocate":
            try:
                alloc.allocate(cmd.owner, cmd.size, cmd.strategy)
            except AllocationError:
                # a rejected request leaves the map unchanged; still record the frame
                failures += 1
        elif cmd.action == "free":
            alloc.release(cmd.owner)
        elif cmd.action == "compact":
            compact_marks.append(len(frames))
            alloc.compact()
        elif cmd.action == "exit":
            break
        else:
            continue
        frames.append(render_state(alloc, owner_ids))

    if not frames:
        raise SystemExit("No frames captured. Check that the script contains A/F/C commands.")
    return alloc, np.stack(frames, axis=0), compact_marks, failures


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--script", required=True, help="Path to a command script")
    ap.add_argument("--out", default="out_fragmentation.png", help="Output image file")
    ap.add_argument("--capacity", type=int, default=80, help="Address space size (units)")
    args = ap.parse_args()

    script_path = Path(args.script)
    if not script_path.exists():
        raise SystemExit(f"Script not found: {script_path}")

    alloc, H, compact_marks, failures = replay(str(script_path), args.capacity)  # H: (time, capacity)

    fig = plt.figure(figsize=(10.5, 4.6))
    ax = fig.add_subplot(111)
    masked = np.ma.masked_where(H == 0, H)
    ax.imshow(masked, aspect="auto", interpolation="nearest", cmap="tab20")
    ax.set_title("Address Space Occupancy (script-driven)")
    ax.set_xlabel("address")
    ax.set_ylabel("time (commands)")

    for t in compact_marks:
        ax.axhline(t, linewidth=1, color="black")

    m = compute_metrics(alloc.holes)
    caption = (
        f"Final fragmentation: LFE={m.lfe}, holes={m.hole_count}, "
        f"external_frag={m.external_frag:.3f}, entropy={m.entropy:.3f}, rejected={failures}"
    )
    fig.text(0.01, 0.01, caption, fontsize=9)

    fig.tight_layout()
    out_path = Path(args.out)
    fig.savefig(str(out_path), dpi=220)
    print(f"Wrote: {out_path.resolve()}")


if __name__ == "__main__":
    main()
