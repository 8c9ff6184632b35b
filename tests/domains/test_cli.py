"""
Tests for the command-line entry point.
"""

import json

from folplan.__main__ import main


class TestCLI:
    def test_plans_romania(self, capsys):
        assert main(["--problem", "romania", "--quiet"]) == 0
        out = capsys.readouterr().out
        assert "1. Fly(Sibiu, Bucharest)" in out
        assert "goal satisfied after executing plan" in out

    def test_bound_override_fails(self, capsys):
        assert main(["--problem", "romania_roads", "--bound", "1", "--quiet"]) == 1
        assert "no plan found within bound 1" in capsys.readouterr().out

    def test_ask(self, capsys):
        assert main(["--problem", "romania", "--ask", "Connected", "Sibiu", "Fagaras"]) == 0
        assert "Connected(Sibiu, Fagaras): yes" in capsys.readouterr().out

    def test_ask_with_variable(self, capsys):
        main(["--problem", "romania_roads", "--ask", "Connected", "Sibiu", "y"])
        out = capsys.readouterr().out
        assert "y = Fagaras" in out
        assert "y = Rimnicu" in out

    def test_ask_no(self, capsys):
        main(["--problem", "romania_roads", "--ask", "Connected", "Sibiu", "Bucharest"])
        assert "Connected(Sibiu, Bucharest): no" in capsys.readouterr().out

    def test_verbose_run(self, capsys):
        assert main(["--problem", "have_cake"]) == 0
        out = capsys.readouterr().out
        assert "Initial state" in out
        assert "Expansion history" in out

    def test_save_load_and_dot(self, tmp_path, capsys):
        path = tmp_path / "search.json"
        dot = tmp_path / "search.dot"
        main(["--problem", "romania_roads", "--max-nodes", "2",
              "--save", str(path), "--quiet"])
        assert json.loads(path.read_text())["step"] == 2
        assert main(["--problem", "romania_roads", "--load", str(path),
                     "--dot", str(dot), "--quiet"]) == 0
        assert "digraph search" in dot.read_text()
        assert "Drive(Fagaras, Bucharest)" in capsys.readouterr().out
