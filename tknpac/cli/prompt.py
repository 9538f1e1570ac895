"""Interactive questions asked by the generate command."""

import sys
from abc import ABC, abstractmethod
from typing import Callable, List, TextIO


class Prompter(ABC):
    """Asks the user questions; swapped for a scripted one in tests."""

    @abstractmethod
    def select(self, message: str, options: List[str], default: str) -> str:
        """Return one of options."""
        ...

    @abstractmethod
    def ask(self, message: str) -> str:
        """Return free text, possibly empty."""
        ...

    @abstractmethod
    def confirm(self, message: str, default: bool) -> bool:
        """Return a yes/no answer."""
        ...


class ConsolePrompter(Prompter):
    """Prompts on a terminal with input()."""

    def __init__(self, out: TextIO | None = None, read: Callable[[str], str] = input) -> None:
        self._out = out or sys.stdout
        self._read = read

    def select(self, message: str, options: List[str], default: str) -> str:
        self._out.write(f"? {message}\n")
        for i, option in enumerate(options, 1):
            marker = " (default)" if option == default else ""
            self._out.write(f"  {i}) {option}{marker}\n")
        while True:
            answer = self._read("> ").strip()
            if not answer:
                return default
            if answer.isdigit() and 1 <= int(answer) <= len(options):
                return options[int(answer) - 1]
            if answer in options:
                return answer
            self._out.write(f"Please enter a number between 1 and {len(options)}\n")

    def ask(self, message: str) -> str:
        return self._read(f"? {message} ").strip()

    def confirm(self, message: str, default: bool) -> bool:
        hint = "(Y/n)" if default else "(y/N)"
        while True:
            answer = self._read(f"? {message} {hint} ").strip().lower()
            if not answer:
                return default
            if answer in ("y", "yes"):
                return True
            if answer in ("n", "no"):
                return False
            self._out.write("Please answer yes or no\n")
