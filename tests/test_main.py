"""
Tests for Main Module
Tests the console flow with patched input.
"""

import pytest
from unittest.mock import Mock, patch

from detective_quest.accusation import Verdict
from detective_quest.exploration import Command
from detective_quest.main import (
    main,
    make_input_port,
    run_demo,
    run_game,
    scripted_port,
)
from detective_quest.mansion import CaseFile


SCENARIO_CASE = CaseFile(
    title="Scenario",
    rooms={
        "name": "Hall",
        "clue": "shoeprint",
        "left": {"name": "Library", "clue": "torn page"},
        "right": {"name": "Kitchen"},
    },
    suspects={"shoeprint": "Carlos", "torn page": "Carlos"},
)


class TestInputPorts:
    """Test the input port helpers."""

    def test_reader_receives_prompt(self):
        reader = Mock(return_value="left")
        port = make_input_port("? ", reader)
        assert port() == "left"
        reader.assert_called_once_with("? ")

    def test_end_of_input_exits(self):
        """EOF is turned into an exit command."""
        port = make_input_port(reader=Mock(side_effect=EOFError))
        assert port() == Command.EXIT.value

    def test_custom_eof_value(self):
        port = make_input_port(reader=Mock(side_effect=EOFError), on_eof="")
        assert port() == ""

    def test_eof_everywhere_ends_without_verdict(self, capsys):
        """Closed stdin leaves the mansion and makes no accusation."""
        with patch("builtins.input", side_effect=EOFError):
            game = run_game(SCENARIO_CASE)
        assert game.exploring == False
        assert game.accusation is None
        assert "Invalid name" in capsys.readouterr().out

    def test_uses_builtin_input_by_default(self):
        with patch("builtins.input", return_value="right"):
            assert make_input_port()() == "right"

    def test_scripted_port_replays_then_exits(self, capsys):
        port = scripted_port(["left", "right"])
        assert [port(), port(), port()] == ["left", "right", "exit"]
        assert "> left" in capsys.readouterr().out


class TestRunGame:
    """Test a full game driven by scripted input."""

    def test_guilty_game(self, capsys):
        commands = scripted_port(["left", "exit"])
        game = run_game(SCENARIO_CASE, read_command=commands, read_accusation=lambda: "  Carlos ")

        out = capsys.readouterr().out
        assert game.accusation.verdict == Verdict.GUILTY
        assert "DETECTIVE QUEST: SCENARIO" in out
        assert 'Clue found: "shoeprint"' in out
        assert "(l) Left -> Library" in out
        assert "  - shoeprint\n  - torn page" in out
        assert "Carlos is the culprit!" in out

    def test_insufficient_evidence(self, capsys):
        game = run_game(SCENARIO_CASE, read_command=scripted_port(["exit"]),
                        read_accusation=lambda: "carlos")
        assert game.accusation.count == 1
        assert "Not enough evidence against carlos." in capsys.readouterr().out

    def test_invalid_choice_reported(self, capsys):
        run_game(SCENARIO_CASE, read_command=scripted_port(["up", "exit"]),
                 read_accusation=lambda: "Carlos")
        assert "Invalid choice" in capsys.readouterr().out

    def test_blank_accusation(self, capsys):
        game = run_game(SCENARIO_CASE, read_command=scripted_port(["exit"]),
                        read_accusation=lambda: "   ")
        assert game.accusation is None
        assert "Invalid name" in capsys.readouterr().out

    def test_no_clues_collected(self, capsys):
        case = CaseFile(title="Empty", rooms={"name": "Void"}, suspects={})
        game = run_game(case, read_command=scripted_port(["exit"]),
                        read_accusation=lambda: "Carlos")
        out = capsys.readouterr().out
        assert "No clues collected." in out
        assert game.accusation.verdict == Verdict.NO_EVIDENCE

    def test_interactive_input(self, capsys):
        """Exploration and accusation read from stdin."""
        with patch("builtins.input", side_effect=["r", "exit", "Carlos"]):
            game = run_game(SCENARIO_CASE)
        assert game.engine.path == ["Hall", "Kitchen"]
        assert game.accusation.count == 1


class TestDemo:
    def test_demo_convicts_mariana(self, capsys):
        game = run_demo()
        out = capsys.readouterr().out
        assert game.engine.path == ["Entrance Hall", "Living Room", "Library"]
        assert game.accusation.accused == "Mariana"
        assert game.accusation.verdict == Verdict.GUILTY
        assert out.count("Invalid choice") == 2


class TestMain:
    """Test argument handling."""

    def test_demo_argument(self):
        with patch("detective_quest.main.run_demo") as mock_demo:
            main(["demo"])
        mock_demo.assert_called_once()

    def test_play_with_case_file(self, tmp_path):
        path = tmp_path / "case.yaml"
        path.write_text("title: Tiny\nrooms:\n  name: Cellar\n", encoding="utf-8")
        with patch("detective_quest.main.run_game") as mock_run:
            main(["play", str(path)])
        assert mock_run.call_args[0][0].title == "Tiny"

    def test_case_file_from_environment(self, tmp_path, monkeypatch):
        path = tmp_path / "env_case.yaml"
        path.write_text("title: From Env\nrooms:\n  name: Attic\n", encoding="utf-8")
        monkeypatch.setenv("DETECTIVE_CASE_FILE", str(path))
        with patch("detective_quest.main.run_game") as mock_run:
            main([])
        assert mock_run.call_args[0][0].title == "From Env"

    def test_default_is_mansion(self, monkeypatch):
        monkeypatch.delenv("DETECTIVE_CASE_FILE", raising=False)
        with patch("detective_quest.main.run_game") as mock_run:
            main([])
        assert mock_run.call_args[0][0].title == "The Enigma Mansion"

    def test_bad_case_file_exits(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["play", str(tmp_path / "missing.yaml")])
        assert exc_info.value.code == 1
        assert "could not load the case" in capsys.readouterr().out

    def test_non_text_suspect_rejected_before_play(self, tmp_path, capsys):
        """A numeric suspect is reported at start-up, not during the accusation."""
        path = tmp_path / "numeric.yaml"
        path.write_text("rooms:\n  name: Dock\n  clue: rope\nsuspects:\n  rope: 7\n", encoding="utf-8")
        with patch("detective_quest.main.run_game") as mock_run:
            with pytest.raises(SystemExit) as exc_info:
                main(["play", str(path)])
        assert exc_info.value.code == 1
        mock_run.assert_not_called()
        assert "must be text" in capsys.readouterr().out

    def test_unknown_argument_prints_usage(self, capsys):
        main(["dance"])
        assert "Usage:" in capsys.readouterr().out
