"""Render a Repository and its run statuses as a text report.

Output depends only on the Repository and the clock instant, so the same
inputs always give byte-identical text.
"""

import logging
from datetime import datetime
from typing import List, Sequence, Tuple

from tknpac.clock import Clock
from tknpac.models import Repository, RunStatus
from tknpac.report.status import classify
from tknpac.report.style import PlainStyle, Style
from tknpac.report.timefmt import format_age, format_duration

NO_RUNS_MESSAGE = "No runs recorded yet"
COLUMNS = ("STATUS", "PIPELINERUN", "SHA", "TITLE", "BRANCH", "EVENT", "AGE", "DURATION")
COLUMN_SEPARATOR = "  "
EMPTY = "-"
SHORT_SHA_LENGTH = 7
MAX_TITLE_LENGTH = 50

LOG = logging.getLogger("tknpac.report")

# (plain text used for width, decorated text written out)
Cell = Tuple[str, str]


def order_runs(runs: Sequence[RunStatus]) -> List[RunStatus]:
    """Most recent start first; runs without a start time go last.

    The sort is stable: equal start times, and runs that never started,
    keep their stored relative order.
    """
    started = [r for r in runs if r.start_time is not None]
    not_started = [r for r in runs if r.start_time is None]
    started.sort(key=lambda r: r.start_time, reverse=True)
    return started + not_started


def _one_line(text: str | None, limit: int | None = None) -> str:
    if not text or not text.strip():
        return EMPTY
    line = text.strip().splitlines()[0].replace("\t", " ")
    if limit is not None and len(line) > limit:
        line = line[: limit - 3].rstrip() + "..."
    return line


def _plain(text: str) -> Cell:
    return text, text


def _row(run: RunStatus, now: datetime, style: Style) -> List[Cell]:
    state = classify(run.condition_reason)
    status = f"{state.icon} {state.value}"

    sha = _one_line(run.sha)
    if sha != EMPTY:
        sha = sha[:SHORT_SHA_LENGTH]
    sha_cell = (sha, style.link(sha, run.sha_url) if run.sha_url and sha != EMPTY else sha)

    if run.start_time and run.completion_time and run.completion_time < run.start_time:
        LOG.debug("Run %s completed before it started, duration unknown", run.pipeline_run_name)

    return [
        (status, style.state(state, status)),
        _plain(_one_line(run.pipeline_run_name)),
        sha_cell,
        _plain(_one_line(run.title, MAX_TITLE_LENGTH)),
        _plain(_one_line(run.target_branch)),
        _plain(_one_line(run.event_type)),
        _plain(format_age(run.start_time, now)),
        _plain(format_duration(run.start_time, run.completion_time)),
    ]


def _table(rows: List[List[Cell]]) -> List[str]:
    widths = [max(len(row[i][0]) for row in rows) for i in range(len(COLUMNS))]
    lines = []
    for row in rows:
        parts = []
        for i, (plain, decorated) in enumerate(row):
            pad = "" if i == len(row) - 1 else " " * (widths[i] - len(plain))
            parts.append(decorated + pad)
        lines.append(COLUMN_SEPARATOR.join(parts).rstrip())
    return lines


def _header(repo: Repository, style: Style) -> List[str]:
    fields = (("Name:", repo.name), ("Namespace:", repo.namespace), ("URL:", repo.url or EMPTY))
    width = max(len(label) for label, _ in fields) + 1
    return [style.bold(label) + " " * (width - len(label)) + value for label, value in fields]


def render(repo: Repository, clock: Clock, style: Style | None = None) -> str:
    """Return the full report for repo, ages relative to clock.now().

    Never raises on a parsed Repository: inconsistent run timestamps only
    degrade the affected field.
    """
    style = style or PlainStyle()
    now = clock.now()

    lines = _header(repo, style)
    lines.append("")
    if not repo.runs:
        lines.append(NO_RUNS_MESSAGE)
    else:
        rows: List[List[Cell]] = [[(c, style.bold(c)) for c in COLUMNS]]
        rows.extend(_row(run, now, style) for run in order_runs(repo.runs))
        lines.extend(_table(rows))
    return "\n".join(lines) + "\n"
