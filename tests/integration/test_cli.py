"""
Integration tests for the cubevm command line.
"""
import pytest

from cubevm.cli import main, resolve_seed


def test_demos_lists_every_demo(capsys):
    assert main(["demos"]) == 0
    out = capsys.readouterr().out
    assert "name-age" in out
    assert "number-game" in out


def test_run_number_game(capsys):
    assert main(["run", "number-game", "--rounds", "3", "--seed", "1"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 3


def test_run_unknown_demo(capsys):
    assert main(["run", "nope"]) == 1
    assert "Unknown demo" in capsys.readouterr().err


def test_run_reports_faults(monkeypatch, capsys):
    answers = iter(["Ada", "not a number"])
    monkeypatch.setattr("builtins.input", lambda message="": next(answers))

    assert main(["run", "name-age"]) == 1
    assert "invalid_numeric_literal" in capsys.readouterr().err


def test_resolve_seed_precedence(monkeypatch):
    monkeypatch.setenv("CUBEVM_SEED", "5")
    assert resolve_seed(9) == 9
    assert resolve_seed(None) == 5

    monkeypatch.setenv("CUBEVM_SEED", "abc")
    assert resolve_seed(None) is None

    monkeypatch.delenv("CUBEVM_SEED")
    assert resolve_seed(None) is None


def test_run_number_game_with_zero_rounds(capsys):
    assert main(["run", "number-game", "--rounds", "0", "--seed", "1"]) == 0
    assert capsys.readouterr().out == ""


def test_rounds_is_a_usage_error_for_name_age(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["run", "name-age", "--rounds", "3"])
    assert excinfo.value.code == 2
    assert "--rounds does not apply to name-age" in capsys.readouterr().err
