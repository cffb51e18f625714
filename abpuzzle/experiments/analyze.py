import argparse
import os
from pathlib import Path

import numpy as np
import pandas as pd

def load_results(paths):
    """Read one or more runner CSVs into a single frame; tolerant to missing columns."""
    dfs = []
    for p in paths:
        df = pd.read_csv(p)
        df["__src__"] = os.path.basename(str(p))
        dfs.append(df)
    if not dfs:
        return pd.DataFrame()
    df = pd.concat(dfs, ignore_index=True, sort=False)

    for c in ("depth", "seed", "max_ply", "explored", "pruned", "value", "g", "time_sec"):
        if c in df.columns:
            df[c] = pd.to_numeric(df[c], errors="coerce")
    if "solvable" not in df.columns:
        df["solvable"] = 1
    if "termination" not in df.columns:
        df["termination"] = "exhausted"
    return df.dropna(subset=["depth", "explored", "pruned"])

def summarize(df: pd.DataFrame) -> pd.DataFrame:
    """
    Per (solvable, depth) group: run count, mean/std of explored and pruned,
    prune ratio (pruned / explored) and fraction of runs that reached the goal.
    """
    if df.empty:
        return pd.DataFrame(columns=["solvable", "depth", "runs", "explored_mean", "explored_std",
                                     "pruned_mean", "pruned_std", "prune_ratio", "solved_frac"])
    work = df.assign(solved=(df["termination"] == "ok").astype(float))
    g = work.groupby(["solvable", "depth"], sort=True)
    out = g.agg(
        runs=("explored", "size"),
        explored_mean=("explored", "mean"),
        explored_std=("explored", "std"),
        pruned_mean=("pruned", "mean"),
        pruned_std=("pruned", "std"),
        solved_frac=("solved", "mean"),
    ).reset_index()
    out[["explored_std", "pruned_std"]] = out[["explored_std", "pruned_std"]].fillna(0.0)

    explored = out["explored_mean"].to_numpy(dtype=float)
    pruned = out["pruned_mean"].to_numpy(dtype=float)
    with np.errstate(divide="ignore", invalid="ignore"):
        out["prune_ratio"] = np.where(explored > 0, pruned / explored, np.nan)
    return out[["solvable", "depth", "runs", "explored_mean", "explored_std",
                "pruned_mean", "pruned_std", "prune_ratio", "solved_frac"]]

def print_summary(df: pd.DataFrame):
    table = summarize(df)
    print("=" * 80)
    print("Alpha-beta search: explored / pruned by scramble depth")
    print("=" * 80)
    if table.empty:
        print("No rows.")
        return table
    print(f"{'solvable':<9} {'depth':<6} {'runs':<5} {'explored':<16} {'pruned':<16} {'ratio':<7} {'solved':<6}")
    for r in table.itertuples(index=False):
        print(f"{int(r.solvable):<9} {int(r.depth):<6} {int(r.runs):<5} "
              f"{r.explored_mean:>7.1f}±{r.explored_std:<7.1f} {r.pruned_mean:>7.1f}±{r.pruned_std:<7.1f} "
              f"{r.prune_ratio:<7.3f} {r.solved_frac:<6.2f}")
    return table

def main():
    ap = argparse.ArgumentParser(description="Summarize alpha-beta runner CSVs.")
    ap.add_argument("csv", nargs="+", type=Path)
    args = ap.parse_args()
    df = load_results(args.csv)
    print_summary(df)

if __name__ == "__main__":
    main()
