"""Run status report: ordering, classification, time formatting and layout."""

from tknpac.report.renderer import NO_RUNS_MESSAGE, order_runs, render
from tknpac.report.status import DisplayState, classify
from tknpac.report.style import AnsiStyle, PlainStyle, Style

__all__ = [
    "NO_RUNS_MESSAGE",
    "AnsiStyle",
    "DisplayState",
    "PlainStyle",
    "Style",
    "classify",
    "order_runs",
    "render",
]
