#!/usr/bin/env python3
from __future__ import annotations
import argparse, logging, sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import structlog

from blockstrike.domains.rules import MoveRules
from blockstrike.domains.units import Units
from blockstrike.errors import PuzzleError
from blockstrike.search.bfs import Step, find_path
from blockstrike.search.graph import TransitionGraph
from blockstrike.search.paths import path_search

log = structlog.get_logger()


@dataclass
class PuzzleConfig:
    number: int
    max_state: int
    rules: Dict[int, List[int]]
    begin: List[int]
    ends: List[List[int]] = field(default_factory=list)
    max_steps: Optional[int] = None


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


# ---------- argument parsing ----------
def number_queue(data: str) -> List[int]:
    """'0,2,' -> [0, 2]; empty parts are skipped."""
    try:
        return [int(part) for part in data.split(",") if part.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected comma separated integers, got {data!r}")


def rule_entry(data: str) -> Tuple[int, List[int]]:
    """'1:0,1,2' -> (1, [0, 1, 2])"""
    move, sep, rest = data.partition(":")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected MOVE:UNIT,UNIT,..., got {data!r}")
    try:
        move_id = int(move)
    except ValueError:
        raise argparse.ArgumentTypeError(f"bad move id in {data!r}")
    return move_id, number_queue(rest)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Find the shortest sequence of block strikes between two states.")
    ap.add_argument("-N", dest="number", type=int, required=True, help="Number of blocks")
    ap.add_argument("-M", dest="max_state", type=int, required=True, help="Number of states per block")
    ap.add_argument("-L", dest="rules", type=rule_entry, action="append", default=[],
                    help="Move rule MOVE:UNIT,UNIT,... (repeat once per move)")
    ap.add_argument("-B", dest="begin", type=number_queue, required=True, help="Begin states s0,s1,...")
    ap.add_argument("-E", dest="ends", type=number_queue, action="append", default=[],
                    help="Accepted end states (repeatable)")
    ap.add_argument("--one-based", action="store_true", help="States are given as 1..M")
    ap.add_argument("--algo", choices=["bfs", "paths"], default="bfs",
                    help="'paths' = generation search carrying whole paths (slow, for cross-checks)")
    ap.add_argument("--max-steps", type=int, default=None, help="Enumeration bound (default M**N)")
    ap.add_argument("--timeout_sec", type=float, default=None, help="Search wall time")
    ap.add_argument("--show-graph", action="store_true", help="Print every node and its links")
    ap.add_argument("--frames", type=Path, default=None, help="Save one PNG per step into this directory")
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap


def config_from_args(args) -> PuzzleConfig:
    shift = 1 if args.one_based else 0
    return PuzzleConfig(
        number=args.number,
        max_state=args.max_state,
        rules=dict(args.rules),
        begin=[s - shift for s in args.begin],
        ends=[[s - shift for s in e] for e in args.ends],
        max_steps=args.max_steps,
    )


def make_units(states: List[int], cfg: PuzzleConfig) -> Units:
    if len(states) != cfg.number:
        raise ValueError(f"{states} has {len(states)} states, expected {cfg.number}")
    return Units.from_states(states, cfg.max_state)


# ---------- solving ----------
def solve(cfg: PuzzleConfig, algo: str = "bfs", timeout_sec: float | None = None):
    """Build the graph over the whole space and search it. Returns (graph, result)."""
    if cfg.max_state < 2:
        raise ValueError(f"need at least 2 states per block, got {cfg.max_state}")
    rules = MoveRules(cfg.number, cfg.rules)
    begin = make_units(cfg.begin, cfg)
    ends = [make_units(e, cfg) for e in cfg.ends]
    zero = Units.zeros(cfg.number, cfg.max_state)
    top = Units.from_states([cfg.max_state - 1] * cfg.number, cfg.max_state)
    graph = TransitionGraph.build(zero, top, rules, cfg.max_steps)
    search = path_search if algo == "paths" else find_path
    res = search(graph, begin, ends, timeout_sec=timeout_sec)
    log.info("solved", algorithm=res["algorithm"], termination=res["termination"],
             nodes=len(graph), edges=graph.edge_count, g=res["g"])
    return graph, res


def format_path(path: List[Step]) -> List[str]:
    lines: List[str] = []
    count = len(path)
    if count == 1:
        lines.append(f"initial state = {list(path[0].units.states)}")
        lines.append("already solved")
        return lines
    for index, (units, hit) in enumerate(path):
        if index == 0:
            lines.append(f"initial state = {list(units.states)}")
            lines.append(f"strike block {hit + 1}")
        elif index == count - 1:
            lines.append(f"end state = {list(units.states)}")
        else:
            lines.append(f"current state = {list(units.states)}")
            lines.append(f"strike block {hit + 1}")
    return lines


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    configure_logging(args.verbose)
    cfg = config_from_args(args)
    if not cfg.ends:
        ap.error("at least one -E end state is required")

    try:
        graph, res = solve(cfg, args.algo, args.timeout_sec)
    except (PuzzleError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.show_graph:
        print(graph.describe())

    if not res["path"]:
        print("NOTHING FOUND!")
        return 1

    for line in format_path(res["path"]):
        print(line)

    if args.frames is not None:
        from blockstrike.experiments.visualize_path import save_frames
        saved = save_frames(res["path"], MoveRules(cfg.number, cfg.rules), args.frames)
        print(f"Saved {saved} frames to {args.frames}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
