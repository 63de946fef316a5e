"""Tests for the snakes_skills command-line entry point."""

import argparse

from snakes_skills.__main__ import cmd_board, cmd_chart, cmd_simulate


def _sim_args(**overrides):
    args = dict(games=4, players=["Ann", "Bo"], seed=9, max_turns=1000, first_win=False)
    args.update(overrides)
    return argparse.Namespace(**args)


def test_board_lists_special_cells(capsys):
    cmd_board(argparse.Namespace())
    out = capsys.readouterr().out
    assert "Ladders" in out
    assert "80 → 100" in out
    assert "16 → 6" in out
    assert "10, 20, 30" in out


def test_simulate_prints_summary(capsys):
    cmd_simulate(_sim_args())
    out = capsys.readouterr().out
    assert "4 games" in out
    assert "Ann" in out and "Bo" in out
    assert "mean turns" in out


def test_chart_writes_file(tmp_path, capsys):
    out_path = tmp_path / "chart.png"
    cmd_chart(_sim_args(first_win=True, output=str(out_path)))
    assert out_path.exists()
    assert "Chart saved" in capsys.readouterr().out
