#!/usr/bin/env python3
import argparse, os
from pathlib import Path
import matplotlib
if "MPLBACKEND" not in os.environ:
    matplotlib.use("Agg")
import matplotlib.pyplot as plt

from typing import List, Optional, FrozenSet

from blockstrike.domains.rules import MoveRules
from blockstrike.domains.units import Units
from blockstrike.search.bfs import Step


def draw_units(units: Units, out_path: Path, struck: FrozenSet[int] = frozenset(),
               title: Optional[str] = None):
    n = len(units)
    plt.figure(figsize=(max(3, 1.2 * n), 2))
    ax = plt.gca()
    ax.set_xlim(0, n); ax.set_ylim(0, 1)
    ax.set_xticks([]); ax.set_yticks([])
    cmap = matplotlib.colormaps["viridis"].resampled(units.max_state)
    for idx, s in enumerate(units.states):
        edge = "red" if idx in struck else "black"
        ax.add_patch(plt.Rectangle((idx + 0.05, 0.1), 0.9, 0.8, facecolor=cmap(s),
                                   edgecolor=edge, linewidth=3 if idx in struck else 1))
        ax.text(idx + 0.5, 0.5, str(s), ha="center", va="center", fontsize=16, color="white")
    if title:
        ax.set_title(title)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    plt.tight_layout()
    plt.savefig(out_path, dpi=120)
    plt.close()


def save_frames(path: List[Step], rules: MoveRules, outdir: Path) -> int:
    """One PNG per step; the blocks about to change are outlined in red."""
    last = len(path) - 1
    for i, (units, hit) in enumerate(path):
        if i == last:
            draw_units(units, outdir / f"step_{i:03d}.png", title="end state")
        else:
            draw_units(units, outdir / f"step_{i:03d}.png", struck=rules[hit],
                       title=f"strike block {hit + 1}")
    return len(path)


def main():
    p = argparse.ArgumentParser(description="Draw a single configuration as a row of blocks.")
    p.add_argument("states", help="Comma separated states, e.g. 0,1,2")
    p.add_argument("-M", dest="max_state", type=int, required=True)
    p.add_argument("--out", type=Path, default=Path("results/figs/units.png"))
    args = p.parse_args()

    units = Units.from_states([int(x) for x in args.states.split(",") if x], args.max_state)
    draw_units(units, args.out)
    print(f"Saved {args.out}")


if __name__ == "__main__":
    main()
