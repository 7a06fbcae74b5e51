#!/usr/bin/env python3
import sys, csv, os, argparse
from pathlib import Path
from collections import defaultdict
import statistics

import matplotlib
# Default to a non-interactive backend; we'll only show() if --show
if "MPLBACKEND" not in os.environ:
    matplotlib.use("Agg")
import matplotlib.pyplot as plt


def _to_int(x):
    try: return int(x)
    except (TypeError, ValueError): return None

def _to_float(x):
    try: return float(x)
    except (TypeError, ValueError): return None


def read_rows(paths):
    rows = []
    for p in paths:
        with open(p, newline="") as f:
            for row in csv.DictReader(f):
                nodes = _to_int(row.get("nodes"))
                if nodes is None:
                    continue
                enum_sec = _to_float(row.get("enumerate_sec")) or 0.0
                link_sec = _to_float(row.get("link_sec")) or 0.0
                rows.append({
                    "algorithm": row.get("algorithm", ""),
                    "nodes": nodes,
                    "build_sec": enum_sec + link_sec,
                    "expanded": _to_int(row.get("expanded")),
                    "time_sec": _to_float(row.get("time_sec")),
                })
    return rows


def agg_mean(rows, metric):
    """(algorithm) -> (xs, ys) with ys the mean metric per node count."""
    buckets = defaultdict(lambda: defaultdict(list))
    for r in rows:
        v = r.get(metric)
        if v is None:
            continue
        buckets[r["algorithm"]][r["nodes"]].append(v)
    series = {}
    for algo, by_nodes in buckets.items():
        xs = sorted(by_nodes)
        series[algo] = (xs, [statistics.mean(by_nodes[x]) for x in xs])
    return series


def plot_metric(ax, rows, metric):
    for algo, (xs, ys) in sorted(agg_mean(rows, metric).items()):
        ax.plot(xs, ys, marker="o", label=algo)
    ax.set_xscale("log")
    ax.set_yscale("log")
    ax.set_xlabel("Configurations (M^N)")
    ax.set_ylabel(metric)
    ax.set_title(f"{metric} vs configurations")
    ax.grid(True)
    ax.legend()


def save_fig(fig, outdir: Path, name: str):
    outdir.mkdir(parents=True, exist_ok=True)
    path = outdir / f"{name}.png"
    fig.savefig(path, dpi=200, bbox_inches="tight")
    print(f"Saved: {path}")
    return path


def main():
    ap = argparse.ArgumentParser(description="Plot runner CSVs and save PNGs.")
    ap.add_argument("csv", nargs="+", help="One or more CSV result files")
    ap.add_argument("--save", default="results/plots", help="Directory to save plots")
    ap.add_argument("--show", action="store_true", help="Also open interactive windows (if GUI available)")
    args = ap.parse_args()

    rows = read_rows(args.csv)
    if not rows:
        print("No rows to plot. Are your CSVs empty?")
        sys.exit(0)

    outdir = Path(args.save)
    base = "combo" if len(args.csv) > 1 else Path(args.csv[0]).stem

    fig, axes = plt.subplots(1, 3, figsize=(15, 5))
    for ax, metric in zip(axes, ["build_sec", "expanded", "time_sec"]):
        plot_metric(ax, rows, metric)
    plt.tight_layout()
    save_fig(fig, outdir, f"{base}_combined")

    if args.show:
        plt.show()
    plt.close(fig)


if __name__ == "__main__":
    main()
