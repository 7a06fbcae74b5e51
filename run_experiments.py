#!/usr/bin/env python3
import subprocess, sys
from pathlib import Path

def run(cmd):
    print("Running:", cmd)
    r = subprocess.run(cmd, shell=True)
    if r.returncode != 0:
        sys.exit(r.returncode)

def main():
    Path("results").mkdir(exist_ok=True)
    run("python -m blockstrike.experiments.runner --sizes 2x2 3x2 3x3 4x2 4x3 5x2 6x2 --per_size 10 --algo bfs --out results/bfs.csv")
    run("python -m blockstrike.experiments.runner --sizes 2x2 3x2 3x3 4x2 --per_size 10 --algo paths --out results/paths.csv")
    run("python -m blockstrike.experiments.plot results/bfs.csv results/paths.csv --save results/plots")
    run("python -m blockstrike.experiments.solve -N 3 -M 3 -L 0:0,1 -L 1:1,2 -L 2:2 -B 1,2,0 -E 0,0,0 --frames results/figs/example_path")

if __name__ == "__main__":
    main()
