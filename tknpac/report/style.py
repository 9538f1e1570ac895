"""Decorations applied on top of the plain report text.

Widths are always computed on the undecorated text, so a styled report
lines up exactly like a plain one.
"""

from tknpac.report.status import DisplayState

_RESET = "\033[0m"


class Style:
    """No decoration."""

    def state(self, state: DisplayState, text: str) -> str:
        return text

    def link(self, text: str, url: str) -> str:
        return text

    def bold(self, text: str) -> str:
        return text


PlainStyle = Style


class AnsiStyle(Style):
    """ANSI colors, and OSC 8 terminal hyperlinks when enabled."""

    COLORS = {
        DisplayState.SUCCEEDED: "32",
        DisplayState.FAILED: "31",
        DisplayState.RUNNING: "34",
        DisplayState.UNKNOWN: "33",
    }

    def __init__(self, hyperlinks: bool = True) -> None:
        self._hyperlinks = hyperlinks

    def state(self, state: DisplayState, text: str) -> str:
        return f"\033[{self.COLORS[state]}m{text}{_RESET}"

    def link(self, text: str, url: str) -> str:
        if not self._hyperlinks:
            return text
        return f"\033]8;;{url}\033\\{text}\033]8;;\033\\"

    def bold(self, text: str) -> str:
        return f"\033[1m{text}{_RESET}"
