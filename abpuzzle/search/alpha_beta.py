from __future__ import annotations
from typing import List, Optional
from time import perf_counter
import logging
import math
import threading

from abpuzzle.domains.puzzle8 import PuzzleState
from abpuzzle.search.clock import Clock, NullClock
from abpuzzle.search.observer import SearchObserver, EXPLORING, PRUNED, OPTIMAL

logger = logging.getLogger(__name__)

DEFAULT_MAX_PLY = 4
DEFAULT_STEP_DELAY = 0.5  # seconds per visited node


class AlphaBetaSearch:
    """
    Depth-limited alpha-beta over 8-puzzle states.

    The puzzle has one player, but levels alternate between a maximizing and a
    minimizing role so the cutoff mechanics are exercised. A terminal node is
    worth -(heuristic) - depth. Every step of the traversal is reported to the
    observer, and the clock is asked to pause after each visit.
    """

    def __init__(
        self,
        initial_state: PuzzleState,
        observer: Optional[SearchObserver] = None,
        clock: Optional[Clock] = None,
        max_ply: int = DEFAULT_MAX_PLY,
        step_delay: float = DEFAULT_STEP_DELAY,
    ):
        if max_ply < 0:
            raise ValueError(f"max_ply must be >= 0, got {max_ply}")
        self.initial_state = initial_state
        self.observer = observer or SearchObserver()
        self.clock = clock or Clock()
        self.max_ply = max_ply
        self.nodes_explored = 0
        self.nodes_pruned = 0
        self.solution: Optional[PuzzleState] = None
        self.value: Optional[float] = None
        self.current_node: Optional[PuzzleState] = None
        self.running = False
        self.step_delay = 0.0
        self.set_speed(step_delay)
        self._guard = threading.Lock()

    # ---------- control ----------
    def start_search(self) -> Optional[List[PuzzleState]]:
        """
        Run one full search from the initial state.

        Returns the root-to-goal path, or None when no goal was reached within
        max_ply. Calling this while a search is running does nothing.
        """
        with self._guard:
            if self.running:
                logger.debug("start_search ignored: a search is already running")
                return None
            self.running = True

        try:
            self.nodes_explored = 0
            self.nodes_pruned = 0
            self.observer.on_stats_updated(self.nodes_explored, self.nodes_pruned)
            logger.debug("search start tiles=%s max_ply=%d", self.initial_state.tiles, self.max_ply)

            t0 = perf_counter()
            self.value = self.alpha_beta(self.initial_state, 0, self.max_ply, -math.inf, math.inf, True)
            logger.debug("search done value=%s explored=%d pruned=%d in %.4fs",
                         self.value, self.nodes_explored, self.nodes_pruned, perf_counter() - t0)

            if self.solution is None:
                self.observer.on_search_completed(None)
                return None

            path = self.solution.path()
            for state in path:
                self.observer.on_node_visited(state, OPTIMAL)
                self.clock.sleep(self.step_delay)
            self.observer.on_search_completed(path)
            return path
        finally:
            self.running = False

    def start_search_in_background(self) -> threading.Thread:
        """Run start_search() on a daemon thread and return the thread."""
        t = threading.Thread(target=self.start_search, name="alpha-beta-search", daemon=True)
        t.start()
        return t

    def alpha_beta(self, state: PuzzleState, ply: int, max_ply: int,
                   alpha: float, beta: float, maximizing: bool) -> float:
        """Value of `state` searched to `max_ply` within the (alpha, beta) window."""
        obs = self.observer
        self.nodes_explored += 1
        obs.on_stats_updated(self.nodes_explored, self.nodes_pruned)

        state.alpha = alpha
        state.beta = beta
        self.current_node = state
        obs.on_current_state_changed(state)
        obs.on_bounds_changed(alpha, beta)
        obs.on_node_visited(state, EXPLORING)
        self.clock.sleep(self.step_delay)

        if ply == max_ply or state.is_goal():
            value = -state.heuristic - state.depth
            if ply == 0 and state.is_goal():
                self.solution = state
            obs.on_node_value_computed(state, value)
            return value

        if maximizing:
            best = -math.inf
            for move in state.possible_moves():
                child = state.apply_move(move)
                state.children.append(child)

                v = self.alpha_beta(child, ply + 1, max_ply, alpha, beta, False)
                best = max(best, v)
                alpha = max(alpha, v)
                obs.on_bounds_changed(alpha, beta)

                if beta <= alpha:
                    self._cutoff(child)
                    break

                # later goals with an equal or better value replace earlier ones
                if child.is_goal() and (ply == 0 or v >= best):
                    self.solution = child
        else:
            best = math.inf
            for move in state.possible_moves():
                child = state.apply_move(move)
                state.children.append(child)

                v = self.alpha_beta(child, ply + 1, max_ply, alpha, beta, True)
                best = min(best, v)
                beta = min(beta, v)
                obs.on_bounds_changed(alpha, beta)

                if beta <= alpha:
                    self._cutoff(child)
                    break

        obs.on_node_value_computed(state, best)
        return best

    def _cutoff(self, child: PuzzleState) -> None:
        child.pruned = True
        self.observer.on_node_visited(child, PRUNED)
        self.clock.sleep(self.step_delay)
        self.nodes_pruned += 1
        self.observer.on_stats_updated(self.nodes_explored, self.nodes_pruned)
        logger.debug("cutoff after %s at depth %d (alpha=%s beta=%s)",
                     child.move, child.depth, child.alpha, child.beta)

    def solution_path(self) -> List[PuzzleState]:
        return self.solution.path() if self.solution is not None else []

    def set_speed(self, seconds: float) -> None:
        """Pause per visited node; picked up at the next visit."""
        if seconds < 0:
            raise ValueError(f"step delay must be >= 0, got {seconds}")
        self.step_delay = seconds

    def reset(self) -> None:
        self.running = False
        self.nodes_explored = 0
        self.nodes_pruned = 0
        self.solution = None
        self.value = None
        self.current_node = None
        self.observer.on_reset()


def alpha_beta_search(
    start,
    max_ply: int = DEFAULT_MAX_PLY,
    observer: Optional[SearchObserver] = None,
    clock: Optional[Clock] = None,
    step_delay: float = 0.0,
):
    """
    Alpha-beta with instrumentation.
    start: a PuzzleState or a 9-tile sequence. Runs without pacing unless a
    clock and step_delay are given. Returns the dict the experiment runner writes.
    """
    root = start if isinstance(start, PuzzleState) else PuzzleState(tuple(start))
    engine = AlphaBetaSearch(root, observer=observer, clock=clock or NullClock(),
                             max_ply=max_ply, step_delay=step_delay)
    t0 = perf_counter()
    path = engine.start_search()
    t1 = perf_counter()
    return {
        "path": path,
        "g": len(path) - 1 if path else None,
        "value": engine.value,
        "explored": engine.nodes_explored,
        "pruned": engine.nodes_pruned,
        "max_ply": max_ply,
        "time": t1 - t0,
        "algorithm": "Alpha-Beta",
        "termination": "ok" if path else "exhausted",
    }
