# ================================================================================
# Tests for the experiment layer (runner, analyze, plot, solve_one)
# ================================================================================

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

from abpuzzle.domains.puzzle8 import is_solvable
from abpuzzle.experiments import analyze, plot, runner, solve_one


@pytest.fixture(scope="module")
def small_df():
    insts = runner.generate_instances([1, 2, 3], per_depth=3, start_seed=0)
    return runner.run_instances(insts, max_ply=2, include_unsolvable=True)


class TestRunner:

    def test_generate_instances(self):
        insts = runner.generate_instances([1, 4], per_depth=3)
        assert [i.depth for i in insts] == [1, 1, 1, 4, 4, 4]
        assert all(is_solvable(i.state) for i in insts)
        assert len({i.seed for i in insts}) == len(insts)

    def test_table_shape(self, small_df):
        assert list(small_df.columns) == runner.COLUMNS
        assert len(small_df) == 18
        assert set(small_df["solvable"]) == {0, 1}
        assert (small_df["algorithm"] == "Alpha-Beta").all()
        assert (small_df["max_ply"] == 2).all()

    def test_counters(self, small_df):
        assert (small_df["explored"] > 0).all()
        assert (small_df["pruned"] <= small_df["explored"]).all()

    def test_one_move_scrambles_are_solved(self, small_df):
        rows = small_df[(small_df["depth"] == 1) & (small_df["solvable"] == 1)]
        assert (rows["termination"] == "ok").all()
        assert (rows["g"] == 1).all()

    def test_unsolvable_twins_never_solve(self, small_df):
        rows = small_df[small_df["solvable"] == 0]
        assert (rows["termination"] == "exhausted").all()

    def test_main_writes_csv(self, tmp_path, capsys):
        out = tmp_path / "runs" / "ab.csv"
        df = runner.main(["--depths", "1", "2", "--per_depth", "2", "--max_ply", "2", "--out", str(out)])
        assert out.exists()
        assert len(pd.read_csv(out)) == len(df) == 4
        text = capsys.readouterr().out
        assert "Alpha-beta search" in text
        assert f"Wrote {out}" in text

    def test_main_without_out(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        df = runner.main(["--depths", "1", "--per_depth", "1", "--max_ply", "1"])
        assert len(df) == 1
        assert list(tmp_path.iterdir()) == []


class TestAnalyze:

    def test_summarize(self, small_df):
        table = analyze.summarize(small_df)
        assert len(table) == 6
        assert (table["runs"] == 3).all()
        ratios = table["prune_ratio"].to_numpy()
        assert np.all((ratios >= 0) & (ratios <= 1))

        solved = table.set_index(["solvable", "depth"])["solved_frac"]
        assert solved.loc[(1, 1)] == 1.0
        assert (solved.loc[0] == 0.0).all()

    def test_summarize_empty(self):
        assert analyze.summarize(pd.DataFrame()).empty

    def test_load_results(self, small_df, tmp_path):
        a = tmp_path / "a.csv"
        b = tmp_path / "b.csv"
        small_df.to_csv(a, index=False)
        small_df.head(4).to_csv(b, index=False)
        df = analyze.load_results([a, b])
        assert len(df) == len(small_df) + 4
        assert set(df["__src__"]) == {"a.csv", "b.csv"}

    def test_load_results_fills_missing_columns(self, tmp_path):
        p = tmp_path / "old.csv"
        pd.DataFrame({"depth": [1, 2], "explored": [10, 20], "pruned": [1, 2]}).to_csv(p, index=False)
        df = analyze.load_results([p])
        assert (df["solvable"] == 1).all()
        table = analyze.summarize(df)
        assert list(table["prune_ratio"]) == [0.1, 0.1]

    def test_print_summary(self, small_df, capsys):
        analyze.print_summary(small_df)
        out = capsys.readouterr().out
        assert "explored / pruned by scramble depth" in out

    def test_print_summary_empty(self, capsys):
        analyze.print_summary(pd.DataFrame())
        assert "No rows." in capsys.readouterr().out


class TestPlot:

    def test_plot_results(self, small_df, tmp_path):
        saved = plot.plot_results(small_df, tmp_path, base="t")
        names = sorted(p.name for p in saved)
        assert names == ["t_combined.png", "t_explored.png", "t_prune_ratio.png", "t_pruned.png"]
        assert all(p.exists() and p.stat().st_size > 0 for p in saved)

    def test_main_names_plots_after_csv(self, small_df, tmp_path):
        csv = tmp_path / "ply2.csv"
        small_df.to_csv(csv, index=False)
        saved = plot.main([str(csv), "--save", str(tmp_path / "plots")])
        assert sorted(p.name for p in saved)[0] == "ply2_combined.png"
        assert len(saved) == 4


class TestSolveOne:

    def test_default_board(self, capsys):
        path = solve_one.main([])
        assert len(path) == 2
        out = capsys.readouterr().out
        assert "step 1 (right), h=0" in out
        assert "7 8 ." in out

    def test_unreachable_board(self, capsys):
        assert solve_one.main(["--tiles", "0", "1", "2", "3", "4", "5", "6", "7", "8"]) is None
        assert "No solution found within depth limit" in capsys.readouterr().out

    def test_scrambled_board(self):
        path = solve_one.main(["--depth", "1", "--seed", "3", "--max_ply", "2"])
        assert path is not None and path[-1].is_goal()

    def test_invalid_board_exits(self):
        with pytest.raises(SystemExit) as e:
            solve_one.main(["--tiles", "1", "1", "2", "3", "4", "5", "6", "7", "8"])
        assert e.value.code == 2

    def test_negative_delay_exits(self):
        with pytest.raises(SystemExit):
            solve_one.main(["--delay", "-1"])
