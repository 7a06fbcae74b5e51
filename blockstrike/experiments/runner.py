from __future__ import annotations
import argparse, csv, random
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

from blockstrike.domains.rules import MoveRules
from blockstrike.domains.units import Units
from blockstrike.search.bfs import find_path
from blockstrike.search.graph import TransitionGraph
from blockstrike.search.paths import path_search


@dataclass
class Instance:
    number: int
    max_state: int
    seed: int
    begin: Units


def ring_rules(number: int, width: int = 1) -> MoveRules:
    """Move i strikes block i and `width` neighbours on each side, wrapping around."""
    table: Dict[int, List[int]] = {}
    for i in range(number):
        table[i] = sorted({(i + d) % number for d in range(-width, width + 1)})
    return MoveRules(number, table)


def _gen(sizes: List[tuple], per_size: int, start_seed: int = 0) -> List[Instance]:
    out: List[Instance] = []
    seed = start_seed
    for number, max_state in sizes:
        for _ in range(per_size):
            rng = random.Random(seed)
            begin = Units.from_states([rng.randrange(max_state) for _ in range(number)], max_state)
            out.append(Instance(number=number, max_state=max_state, seed=seed, begin=begin))
            seed += 1
    return out


def parse_size(text: str) -> tuple:
    """'4x3' -> (4, 3): four blocks with three states each."""
    try:
        n, m = text.lower().split("x")
        return int(n), int(m)
    except ValueError:
        raise argparse.ArgumentTypeError(f"size must look like NxM, got {text!r}")


def main():
    ap = argparse.ArgumentParser(description="Graph-build and search scaling runner")
    ap.add_argument("--sizes", type=parse_size, nargs="+", default=[(2, 2), (3, 2), (3, 3), (4, 2), (4, 3), (5, 2), (6, 2)],
                    help="Board sizes as NxM")
    ap.add_argument("--per_size", type=int, default=5)
    ap.add_argument("--width", type=int, default=1, help="Neighbours struck on each side")
    ap.add_argument("--algo", choices=["bfs", "paths", "both"], default="bfs",
                    help="'paths' carries whole paths and explodes quickly; keep sizes tiny")
    ap.add_argument("--timeout_sec", type=float, default=None, help="Per-instance search wall time")
    ap.add_argument("--out", type=Path, default=Path("results/last_run.csv"))
    args = ap.parse_args()

    insts = _gen(args.sizes, args.per_size)
    args.out.parent.mkdir(parents=True, exist_ok=True)

    header = [
        "algorithm", "number", "max_state", "seed", "nodes", "edges",
        "enumerate_sec", "link_sec", "expanded", "generated", "g", "time_sec", "termination",
    ]
    want_bfs = args.algo in ("bfs", "both")
    want_paths = args.algo in ("paths", "both")

    graphs: Dict[tuple, TransitionGraph] = {}
    with args.out.open("w", newline="") as f:
        w = csv.writer(f); w.writerow(header)
        for inst in insts:
            key = (inst.number, inst.max_state)
            if key not in graphs:
                graphs[key] = TransitionGraph.full(inst.number, inst.max_state, ring_rules(inst.number, args.width))
            graph = graphs[key]
            goal = [Units.zeros(inst.number, inst.max_state)]

            runs = []
            if want_bfs:
                runs.append(find_path(graph, inst.begin, goal, timeout_sec=args.timeout_sec))
            if want_paths:
                runs.append(path_search(graph, inst.begin, goal, timeout_sec=args.timeout_sec))
            for r in runs:
                w.writerow([
                    r["algorithm"], inst.number, inst.max_state, inst.seed, len(graph), graph.edge_count,
                    f"{graph.enumerate_time:.6f}", f"{graph.link_time:.6f}",
                    r["expanded"], r["generated"], r["g"] if r["g"] is not None else "",
                    f"{r['time']:.6f}", r["termination"],
                ])

    print(f"Wrote {args.out} ({len(insts)} instances, {len(graphs)} graphs)")


if __name__ == "__main__":
    main()
