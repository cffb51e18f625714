#!/usr/bin/env python3
import sys, os, argparse
from pathlib import Path

import numpy as np
import matplotlib
# Default to a non-interactive backend; we'll only show() if --show
if "MPLBACKEND" not in os.environ:
    matplotlib.use("Agg")
import matplotlib.pyplot as plt

from abpuzzle.experiments.analyze import load_results, summarize

METRICS = [
    ("explored", "nodes explored"),
    ("pruned", "cutoffs"),
    ("prune_ratio", "pruned / explored"),
]

def plot_metric(ax, table, metric, label):
    for solvable, sub in table.groupby("solvable"):
        xs = sub["depth"].to_numpy(dtype=float)
        if metric == "prune_ratio":
            ys = sub["prune_ratio"].to_numpy(dtype=float)
            es = np.zeros_like(ys)
        else:
            ys = sub[f"{metric}_mean"].to_numpy(dtype=float)
            es = sub[f"{metric}_std"].to_numpy(dtype=float)
        # offset unsolvable twins a little so curves don’t overlap
        offset = 0.0 if solvable else 0.12
        name = "solvable" if solvable else "unsolvable"
        ax.errorbar(xs + offset, ys, yerr=es, marker="o", capsize=3, label=name)
    ax.set_xlabel("Scramble depth")
    ax.set_ylabel(label)
    ax.set_title(f"{label} vs depth (mean ± std)")
    ax.grid(True)
    ax.legend()

def save_fig(fig, outdir: Path, name: str):
    outdir.mkdir(parents=True, exist_ok=True)
    path = outdir / f"{name}.png"
    fig.savefig(path, dpi=200, bbox_inches="tight")
    print(f"Saved: {path}")
    return path

def plot_results(df, outdir: Path, base: str = "alpha_beta", close: bool = True):
    """Write the combined panel and one figure per metric; returns the saved paths."""
    table = summarize(df)
    saved = []

    fig, axes = plt.subplots(1, len(METRICS), figsize=(15, 5))
    for ax, (metric, label) in zip(axes, METRICS):
        plot_metric(ax, table, metric, label)
    fig.tight_layout()
    saved.append(save_fig(fig, outdir, f"{base}_combined"))
    if close:
        plt.close(fig)

    for metric, label in METRICS:
        fig, ax = plt.subplots(figsize=(8, 6))
        plot_metric(ax, table, metric, label)
        fig.tight_layout()
        saved.append(save_fig(fig, outdir, f"{base}_{metric}"))
        if close:
            plt.close(fig)
    return saved

def main(argv=None):
    ap = argparse.ArgumentParser(description="Errorbar plots of explored / pruned nodes per scramble depth.")
    ap.add_argument("csv", nargs="+", type=Path, help="Runner CSV files")
    ap.add_argument("--save", type=Path, default=Path("results/plots"), help="Output directory for PNGs")
    ap.add_argument("--show", action="store_true", help="Keep the figures open and show them")
    args = ap.parse_args(argv)

    df = load_results(args.csv)
    if df.empty:
        sys.exit(f"No usable rows in {', '.join(map(str, args.csv))}")

    base = args.csv[0].stem if len(args.csv) == 1 else "combo"
    saved = plot_results(df, args.save, base, close=not args.show)
    if args.show:
        plt.show()
    return saved

if __name__ == "__main__":
    main()
