from __future__ import annotations
import argparse
import logging
from dataclasses import dataclass
from itertools import count, islice
from pathlib import Path
from typing import List, Optional

import pandas as pd

from abpuzzle.domains.puzzle8 import (
    scramble,
    is_solvable,
    make_unsolvable_variant,
)
from abpuzzle.search.alpha_beta import alpha_beta_search, DEFAULT_MAX_PLY
from abpuzzle.experiments.analyze import print_summary

logger = logging.getLogger(__name__)

COLUMNS = [
    "algorithm", "depth", "seed", "max_ply",
    "explored", "pruned", "value", "g", "time_sec",
    "termination", "solvable",
]

@dataclass
class Instance:
    seed: int
    depth: int
    state: tuple

def generate_instances(depths: List[int], per_depth: int, start_seed: int = 0) -> List[Instance]:
    """`per_depth` scrambles at each depth, each from its own consecutive seed."""
    seeds = count(start_seed)
    return [Instance(seed=seed, depth=d, state=scramble(d, seed))
            for d in depths for seed in islice(seeds, per_depth)]

def make_row(res, inst: Instance, board) -> dict:
    return {
        "algorithm": res["algorithm"],
        "depth": inst.depth,
        "seed": inst.seed,
        "max_ply": res["max_ply"],
        "explored": res["explored"],
        "pruned": res["pruned"],
        "value": res["value"],
        "g": res["g"],
        "time_sec": round(res["time"], 6),
        "termination": res["termination"],
        "solvable": int(is_solvable(board)),
    }

def run_instances(insts: List[Instance], max_ply: int = DEFAULT_MAX_PLY,
                  include_unsolvable: bool = False) -> pd.DataFrame:
    rows = []
    for inst in insts:
        r = alpha_beta_search(inst.state, max_ply=max_ply)
        rows.append(make_row(r, inst, inst.state))
        logger.debug("depth=%d seed=%d explored=%d pruned=%d termination=%s",
                     inst.depth, inst.seed, r["explored"], r["pruned"], r["termination"])

        # parity-flipped twin, never reaches the goal
        if include_unsolvable:
            u = make_unsolvable_variant(inst.state)
            r = alpha_beta_search(u, max_ply=max_ply)
            rows.append(make_row(r, inst, u))
    return pd.DataFrame(rows, columns=COLUMNS)

def main(argv: Optional[List[str]] = None):
    ap = argparse.ArgumentParser(description="Alpha-beta 8-puzzle experiment runner")
    ap.add_argument("--depths", type=int, nargs="+", default=[1, 2, 3, 4, 6, 8],
                    help="Scramble depths (random blank moves from the goal)")
    ap.add_argument("--per_depth", type=int, default=10)
    ap.add_argument("--max_ply", type=int, default=DEFAULT_MAX_PLY)
    ap.add_argument("--start_seed", type=int, default=0)
    ap.add_argument("--include_unsolvable", action="store_true", help="Also run parity-flipped variants")
    ap.add_argument("--out", type=Path, default=None, help="Write the per-run table as CSV")
    ap.add_argument("--verbose", "-v", action="store_true")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")
    if args.max_ply < 0:
        ap.error("--max_ply must be >= 0")

    insts = generate_instances(args.depths, args.per_depth, args.start_seed)
    df = run_instances(insts, max_ply=args.max_ply, include_unsolvable=args.include_unsolvable)
    print_summary(df)

    if args.out is not None:
        args.out.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(args.out, index=False)
        print(f"Wrote {args.out} ({len(insts)} instances, {len(df)} runs)")
    return df

if __name__ == "__main__":
    main()
