# ================================================================================
# Tests for observers, bound formatting and clocks
# ================================================================================

import logging
import math

from abpuzzle.domains.puzzle8 import PuzzleState
from abpuzzle.search.alpha_beta import AlphaBetaSearch
from abpuzzle.search.clock import NullClock
from abpuzzle.search.observer import (
    LoggingObserver,
    NullObserver,
    RecordingObserver,
    STATUSES,
    format_bound,
)


class TestFormatBound:

    def test_infinities_are_distinct(self):
        assert format_bound(-math.inf) == "-∞"
        assert format_bound(math.inf) == "∞"

    def test_finite_values(self):
        assert format_bound(-3) == "-3"
        assert format_bound(-3.0) == "-3"
        assert format_bound(0) == "0"
        assert format_bound(2.5) == "2.5"


class TestObservers:

    def test_statuses(self):
        assert STATUSES == ("exploring", "pruned", "optimal")

    def test_null_observer_accepts_everything(self):
        obs = NullObserver()
        s = PuzzleState((1, 2, 3, 4, 5, 6, 7, 8, 0))
        obs.on_stats_updated(1, 0)
        obs.on_current_state_changed(s)
        obs.on_bounds_changed(-math.inf, math.inf)
        obs.on_node_visited(s, "exploring")
        obs.on_node_value_computed(s, 0)
        obs.on_search_completed(None)
        obs.on_reset()

    def test_recording_views(self):
        rec = RecordingObserver()
        s = PuzzleState((1, 2, 3, 4, 5, 6, 7, 0, 8))
        rec.on_node_visited(s, "exploring")
        rec.on_node_visited(s, "pruned")
        rec.on_node_value_computed(s, -1)
        assert rec.visited() == [s]
        assert rec.visited("pruned") == [s]
        assert rec.values() == [(s, -1)]
        assert rec.completed is None


class TestLoggingObserver:

    def _run(self, tiles, caplog, max_ply=4):
        log = logging.getLogger("tests.trace")
        caplog.set_level(logging.DEBUG, logger="tests.trace")
        engine = AlphaBetaSearch(PuzzleState(tiles), observer=LoggingObserver(log),
                                 clock=NullClock(), step_delay=0, max_ply=max_ply)
        engine.start_search()
        return engine

    def test_logs_solution(self, caplog):
        self._run((1, 2, 3, 4, 5, 6, 7, 0, 8), caplog, max_ply=2)
        assert "Solution in 1 move(s): right" in caplog.text
        assert "exploring depth=0 h=1 move=None tiles=123456708 alpha=-∞ beta=∞" in caplog.text
        assert "pruned depth=" in caplog.text

    def test_logs_no_solution(self, caplog):
        self._run((0, 1, 2, 3, 4, 5, 6, 7, 8), caplog)
        assert "No solution found within depth limit" in caplog.text

    def test_logs_already_solved(self, caplog):
        self._run((1, 2, 3, 4, 5, 6, 7, 8, 0), caplog)
        assert "Solution in 0 move(s): (already solved)" in caplog.text

    def test_logs_reset(self, caplog):
        engine = self._run((1, 2, 3, 4, 5, 6, 7, 0, 8), caplog)
        engine.reset()
        assert "Search reset" in caplog.text


class TestNullClock:

    def test_counts_without_sleeping(self):
        c = NullClock()
        c.sleep(10)
        c.sleep(0.5)
        assert c.calls == 2
        assert c.requested == 10.5
