from __future__ import annotations
import argparse, logging, sys
from control.shell import CommandShell
from memory.allocator import ContiguousAllocator, DEFAULT_CAPACITY
from memory.fragmentation import compute_metrics
from viz.ascii_map import render_map

def print_summary(shell: CommandShell, show_map: bool=False, map_width: int=0, out=None):
    out = out if out is not None else sys.stdout
    alloc=shell.alloc
    stats=shell.stats
    m=compute_metrics(alloc.holes)
    print("="*72, file=out)
    print("Contiguous Allocation Simulator - Summary", file=out)
    print("="*72, file=out)
    print(f"Capacity: {alloc.capacity}  Used: {alloc.used()}  Free: {alloc.free_units()}  "
          f"Segments: {len(alloc.segments())}", file=out)
    print(f"Commands: {stats['commands']}  Allocations: {stats['allocations']}  Releases: {stats['releases']}  "
          f"Invalid: {stats['invalid']}", file=out)
    print(f"Allocation failures: memory={stats['alloc_fail_memory']} algorithm={stats['alloc_fail_algorithm']}",
          file=out)
    print(f"Compactions: {stats['compactions']}  Units moved: {stats['units_moved']}", file=out)
    print("-"*72, file=out)
    print(f"Fragmentation: LFE={m.lfe} holes={m.hole_count} external_frag={m.external_frag:.3f} entropy={m.entropy:.3f}",
          file=out)
    if show_map:
        print("-"*72, file=out)
        print("Memory map (ASCII):", file=out)
        print(render_map(alloc, map_width), file=out)
    print("="*72, file=out)

def build_parser() -> argparse.ArgumentParser:
    ap=argparse.ArgumentParser(description="Contiguous memory allocation simulator (first/best/worst fit + compaction).")
    ap.add_argument('--capacity', type=int, default=DEFAULT_CAPACITY)
    ap.add_argument('--script', help="Run a command file (same as 'R <file>') instead of the interactive prompt.")
    ap.add_argument('--stats', action='store_true', help="Print a session summary on exit.")
    ap.add_argument('--show-map', action='store_true', help="Include the final memory map in the summary.")
    ap.add_argument('--map-width', type=int, default=0, help="Bin the summary map to this many columns (0 = one per unit).")
    ap.add_argument('--log-level', default='WARNING', choices=['DEBUG','INFO','WARNING','ERROR'])
    return ap

def main(argv=None) -> int:
    args=build_parser().parse_args(argv)
    if args.capacity <= 0:
        print(f"--capacity must be positive, got {args.capacity}", file=sys.stderr)
        return 2
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format='[{asctime} {name} - {levelname}] {message}', style='{')

    shell=CommandShell(ContiguousAllocator(args.capacity))
    status=0
    if args.script:
        if not shell.read_file(args.script):
            status=1
    else:
        shell.interactive()

    if args.stats or args.show_map:
        print_summary(shell, show_map=args.show_map, map_width=args.map_width)
    return status

if __name__=='__main__':
    sys.exit(main())
