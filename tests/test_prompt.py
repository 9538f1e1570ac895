"""Tests for the console prompter."""

import io
from typing import Callable, List

from tknpac.cli.prompt import ConsolePrompter


def _reader(answers: List[str]) -> Callable[[str], str]:
    it = iter(answers)
    return lambda _prompt: next(it)


def test_select_by_number_and_default() -> None:
    """Numbers pick options; empty answer picks the default."""
    out = io.StringIO()
    options = ["Pull Request", "Push to a Branch or a Tag"]
    assert ConsolePrompter(out, _reader(["2"])).select("Event?", options, "Pull Request") == options[1]
    assert ConsolePrompter(out, _reader([""])).select("Event?", options, "Pull Request") == options[0]
    assert "1) Pull Request (default)" in out.getvalue()


def test_select_retries_invalid_answer() -> None:
    """Out of range answers are asked again."""
    out = io.StringIO()
    choice = ConsolePrompter(out, _reader(["9", "1"])).select("Event?", ["a", "b"], "b")
    assert choice == "a"
    assert "Please enter a number between 1 and 2" in out.getvalue()


def test_confirm() -> None:
    """y/n answers, empty keeps the default, junk is asked again."""
    out = io.StringIO()
    assert ConsolePrompter(out, _reader(["y"])).confirm("Ok?", default=False) is True
    assert ConsolePrompter(out, _reader(["NO"])).confirm("Ok?", default=True) is False
    assert ConsolePrompter(out, _reader([""])).confirm("Ok?", default=True) is True
    assert ConsolePrompter(out, _reader(["maybe", "yes"])).confirm("Ok?", default=False) is True
    assert "Please answer yes or no" in out.getvalue()


def test_ask_strips() -> None:
    """Free text answers are stripped."""
    assert ConsolePrompter(io.StringIO(), _reader(["  develop "])).ask("Branch?") == "develop"
