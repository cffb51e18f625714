#!/usr/bin/env python3
import subprocess, sys
from pathlib import Path

def run(desc, cmd):
    print(f"\n=== {desc} ===\n{cmd}")
    r = subprocess.run(cmd, shell=True)
    if r.returncode != 0:
        sys.exit(r.returncode)

def main():
    Path("results").mkdir(exist_ok=True)
    run("Alpha-beta ply 4", "python -m abpuzzle.experiments.runner --depths 1 2 3 4 6 8 --per_depth 10 --include_unsolvable --out results/alpha_beta_ply4.csv")
    run("Alpha-beta ply 2", "python -m abpuzzle.experiments.runner --depths 1 2 3 4 --per_depth 10 --max_ply 2 --out results/alpha_beta_ply2.csv")
    run("Plots", "python -m abpuzzle.experiments.plot results/alpha_beta_ply4.csv --save results/plots")

if __name__ == "__main__":
    main()
