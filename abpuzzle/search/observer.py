from __future__ import annotations
from typing import Any, List, Optional, Tuple
import logging
import math

from abpuzzle.domains.puzzle8 import PuzzleState

EXPLORING = "exploring"
PRUNED = "pruned"
OPTIMAL = "optimal"
STATUSES = (EXPLORING, PRUNED, OPTIMAL)


def format_bound(x: float) -> str:
    """Render an alpha/beta bound, keeping infinities distinct from numbers."""
    if x == -math.inf:
        return "-∞"
    if x == math.inf:
        return "∞"
    if float(x).is_integer():
        return str(int(x))
    return str(x)


class SearchObserver:
    """
    Receives the search trace. Every hook is a no-op here; presentation layers
    override the ones they need.
    """

    def on_stats_updated(self, nodes_explored: int, nodes_pruned: int) -> None:
        pass

    def on_current_state_changed(self, state: PuzzleState) -> None:
        pass

    def on_bounds_changed(self, alpha: float, beta: float) -> None:
        pass

    def on_node_visited(self, state: PuzzleState, status: str) -> None:
        pass

    def on_node_value_computed(self, state: PuzzleState, value: float) -> None:
        pass

    def on_search_completed(self, path: Optional[List[PuzzleState]]) -> None:
        pass

    def on_reset(self) -> None:
        pass


NullObserver = SearchObserver


class RecordingObserver(SearchObserver):
    """Keeps every notification as an (event, payload) tuple, in order."""

    def __init__(self):
        self.events: List[Tuple[str, Any]] = []

    def on_stats_updated(self, nodes_explored, nodes_pruned):
        self.events.append(("stats", (nodes_explored, nodes_pruned)))

    def on_current_state_changed(self, state):
        self.events.append(("current", state))

    def on_bounds_changed(self, alpha, beta):
        self.events.append(("bounds", (alpha, beta)))

    def on_node_visited(self, state, status):
        self.events.append(("visit", (state, status)))

    def on_node_value_computed(self, state, value):
        self.events.append(("value", (state, value)))

    def on_search_completed(self, path):
        self.events.append(("completed", path))

    def on_reset(self):
        self.events.append(("reset", None))

    # ---------- convenience views ----------
    def payloads(self, event: str) -> List[Any]:
        return [p for e, p in self.events if e == event]

    def visited(self, status: str = EXPLORING) -> List[PuzzleState]:
        return [s for s, st in self.payloads("visit") if st == status]

    def values(self) -> List[Tuple[PuzzleState, float]]:
        return self.payloads("value")

    @property
    def completed(self) -> Optional[List[PuzzleState]]:
        done = self.payloads("completed")
        return done[-1] if done else None


class LoggingObserver(SearchObserver):
    """Writes the search trace to a logger (node visits at DEBUG, outcome at INFO)."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.log = logger or logging.getLogger("abpuzzle.trace")

    def on_node_visited(self, state, status):
        self.log.debug("%s depth=%d h=%d move=%s tiles=%s alpha=%s beta=%s",
                       status, state.depth, state.heuristic, state.move or "None",
                       "".join(map(str, state.tiles)),
                       format_bound(state.alpha), format_bound(state.beta))

    def on_node_value_computed(self, state, value):
        self.log.debug("value depth=%d tiles=%s -> %s",
                       state.depth, "".join(map(str, state.tiles)), format_bound(value))

    def on_search_completed(self, path):
        if path is None:
            self.log.info("No solution found within depth limit")
        else:
            moves = [s.move for s in path[1:]]
            self.log.info("Solution in %d move(s): %s", len(moves), " ".join(moves) or "(already solved)")

    def on_reset(self):
        self.log.info("Search reset")
