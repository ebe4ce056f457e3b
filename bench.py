from __future__ import annotations
import argparse
import random
import re
import string
import subprocess
import sys
import tempfile
from pathlib import Path

PY = sys.executable  # respects venv if activated, otherwise uses current python
ROOT = Path(__file__).resolve().parent

STRATEGIES = [("F", "first-fit"), ("B", "best-fit"), ("W", "worst-fit")]

PATTERNS = {
    "allocations": re.compile(r"Allocations:\s+(\d+)"),
    "fail_memory": re.compile(r"failures: memory=(\d+)"),
    "compactions": re.compile(r"Compactions:\s+(\d+)"),
    "moved": re.compile(r"Units moved:\s+(\d+)"),
    "used": re.compile(r"Used:\s+(\d+)"),
    "lfe": re.compile(r"Fragmentation: LFE=(\d+)"),
    "holes": re.compile(r"holes=(\d+)"),
    "external_frag": re.compile(r"external_frag=([0-9\.]+)"),
}

def make_workload(strategy: str, steps: int, capacity: int, seed: int, compact_every: int=0) -> list[str]:
    """Seeded allocate/free mix over single-letter owners.

    The random stream does not depend on ``strategy`` so every strategy sees
    the same requests.
    """
    rng=random.Random(seed)
    owners=list(string.ascii_uppercase)
    live: list[str]=[]
    lines=[]
    max_req=max(1, capacity//6)
    for i in range(1, steps+1):
        if live and rng.random() < 0.4:
            victim=live.pop(rng.randrange(len(live)))
            lines.append(f"F {victim}")
        else:
            free=[o for o in owners if o not in live]
            owner=rng.choice(free) if free else rng.choice(owners)
            size=rng.randint(1, max_req)
            lines.append(f"A {owner} {size} {strategy}")
            if owner not in live:
                live.append(owner)
        if compact_every and i % compact_every == 0:
            lines.append("C")
    return lines

def run(script: Path, capacity: int) -> str:
    cmd = [PY, str(ROOT / "run_sim.py"), "--script", str(script), "--capacity", str(capacity), "--stats"]
    return subprocess.check_output(cmd, stderr=subprocess.STDOUT, text=True)

def parse(out: str):
    def get(key, default=None):
        m = PATTERNS[key].search(out)
        return m.group(1) if m else default
    return {
        "allocations": int(get("allocations", 0)),
        "fail_memory": int(get("fail_memory", 0)),
        "compactions": int(get("compactions", 0)),
        "moved": int(get("moved", 0)),
        "used": int(get("used", 0)),
        "lfe": int(get("lfe", 0)),
        "holes": int(get("holes", 0)),
        "external_frag": float(get("external_frag", 0.0)),
    }

def main():
    ap=argparse.ArgumentParser()
    ap.add_argument("--steps", type=int, default=200)
    ap.add_argument("--capacity", type=int, default=80)
    ap.add_argument("--seed", type=int, default=7)
    ap.add_argument("--compact-every", type=int, default=0)
    args=ap.parse_args()

    rows=[]
    with tempfile.TemporaryDirectory() as tmp:
        for sym, name in STRATEGIES:
            script=Path(tmp) / f"workload_{sym}.txt"
            script.write_text("\n".join(make_workload(sym, args.steps, args.capacity, args.seed, args.compact_every)) + "\n",
                              encoding="utf-8")
            rows.append((name, parse(run(script, args.capacity))))

    header = ["strategy","allocs","no_mem","compacts","moved","used","LFE","holes","ext_frag"]
    print("="*90)
    print(f"Placement Strategy Benchmark (steps={args.steps} capacity={args.capacity} seed={args.seed})")
    print("="*90)
    print("{:<10} {:>7} {:>7} {:>9} {:>6} {:>6} {:>5} {:>6} {:>9}".format(*header))
    for name, m in rows:
        print("{:<10} {:>7} {:>7} {:>9} {:>6} {:>6} {:>5} {:>6} {:>9.3f}".format(
            name, m["allocations"], m["fail_memory"], m["compactions"], m["moved"], m["used"],
            m["lfe"], m["holes"], m["external_frag"]
        ))
    print("="*90)
    print("Tip: replay a workload with a visual map of the final state:")
    print("  python run_sim.py --script <file> --show-map")

if __name__ == "__main__":
    main()
