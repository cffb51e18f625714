#!/usr/bin/env python3
import argparse
import logging
from typing import List, Optional

from abpuzzle.domains.puzzle8 import PuzzleState, InvalidBoardError, scramble
from abpuzzle.search.alpha_beta import AlphaBetaSearch, DEFAULT_MAX_PLY
from abpuzzle.search.clock import Clock
from abpuzzle.search.observer import LoggingObserver, format_bound

def board_text(state: PuzzleState) -> str:
    lines = []
    for row in state.rows():
        lines.append(" ".join("." if t == 0 else str(t) for t in row))
    return "\n".join(lines)

def main(argv: Optional[List[str]] = None):
    p = argparse.ArgumentParser(description="Run one observed alpha-beta search and print the solution path.")
    p.add_argument("--tiles", type=int, nargs=9, default=None,
                   help="Initial board, row by row, 0 = blank (default: 1 2 3 4 5 6 7 0 8)")
    p.add_argument("--depth", type=int, default=None, help="Scramble the goal by this many moves instead of --tiles")
    p.add_argument("--seed", type=int, default=1)
    p.add_argument("--max_ply", type=int, default=DEFAULT_MAX_PLY)
    p.add_argument("--delay", type=float, default=0.0, help="Seconds to pause per visited node")
    p.add_argument("--verbose", "-v", action="store_true", help="Log every visited node")
    args = p.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    if args.depth is not None:
        tiles = scramble(args.depth, args.seed)
    else:
        tiles = args.tiles or [1, 2, 3, 4, 5, 6, 7, 0, 8]
    try:
        root = PuzzleState(tuple(tiles))
    except InvalidBoardError as e:
        p.error(str(e))
    if args.delay < 0:
        p.error("--delay must be >= 0")
    if args.max_ply < 0:
        p.error("--max_ply must be >= 0")

    search = AlphaBetaSearch(root, observer=LoggingObserver(), clock=Clock(),
                             max_ply=args.max_ply, step_delay=args.delay)
    path = search.start_search()

    print(f"explored={search.nodes_explored} pruned={search.nodes_pruned} "
          f"root value={format_bound(search.value)}")
    if not path:
        print("No solution found within depth limit")
        return None
    for i, s in enumerate(path):
        print(f"\nstep {i} ({s.move or 'start'}), h={s.heuristic}")
        print(board_text(s))
    return path

if __name__ == "__main__":
    main()
