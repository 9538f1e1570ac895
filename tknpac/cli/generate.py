"""`tknpac generate`: scaffold a starter PipelineRun in .tekton/."""

import argparse
import logging
import sys
from pathlib import Path
from typing import TextIO

from tknpac.cli.prompt import ConsolePrompter, Prompter
from tknpac.report import DisplayState, PlainStyle, Style
from tknpac.services import (
    DEFAULT_EVENT_TYPE,
    EVENT_TYPES,
    MAIN_BRANCH,
    TEKTON_DIR,
    GitError,
    git_top_level,
    pipelinerun_file_path,
    render_pipelinerun,
)

INFO_ICON = "ℹ"

LOG = logging.getLogger("tknpac.cli.generate")


class GenerateError(Exception):
    """Raised when the starter PipelineRun cannot be generated."""

    pass


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for generate."""
    parser = argparse.ArgumentParser(
        prog="tknpac generate",
        description="Generate a basic PipelineRun in the .tekton directory",
    )
    parser.add_argument(
        "--event-type",
        choices=sorted(EVENT_TYPES),
        default=None,
        help="Git event triggering the pipeline (asked when omitted)",
    )
    parser.add_argument(
        "--branch",
        default=None,
        help=f"Target branch or tag (asked when omitted, default {MAIN_BRANCH})",
    )
    parser.add_argument(
        "--yes",
        "-y",
        action="store_true",
        help="Answer yes to every confirmation, including overwriting an existing file",
    )
    return parser.parse_args(argv)


def ask_event_type(prompter: Prompter) -> str:
    """Ask which event triggers the pipeline; return its key."""
    labels = list(EVENT_TYPES.values())
    choice = prompter.select(
        "Enter the Git event type for triggering the pipeline:",
        labels,
        EVENT_TYPES[DEFAULT_EVENT_TYPE],
    )
    for key, label in EVENT_TYPES.items():
        if label == choice:
            return key
    raise GenerateError(f"invalid event type: {choice}")


def ask_branch(prompter: Prompter, event_type: str) -> str:
    """Ask the target branch (or tag for push); empty answer means main."""
    if event_type == "pull_request":
        msg = f"Enter the target GIT branch for the Pull Request (default: {MAIN_BRANCH}):"
    else:
        msg = f"Enter a target GIT branch or a tag for the push (default: {MAIN_BRANCH}):"
    return prompter.ask(msg) or MAIN_BRANCH


def generate(
    top_level: Path,
    prompter: Prompter,
    out: TextIO,
    event_type: str | None = None,
    branch: str | None = None,
    assume_yes: bool = False,
    style: Style | None = None,
) -> Path | None:
    """Write the starter PipelineRun under top_level/.tekton.

    Returns the written path, or None when the user declined.
    """
    style = style or PlainStyle()
    if event_type is None:
        event_type = ask_event_type(prompter)
    elif event_type not in EVENT_TYPES:
        raise GenerateError(f"invalid event type: {event_type}")
    if not branch:
        branch = ask_branch(prompter, event_type)

    fpath = pipelinerun_file_path(top_level, event_type)
    relpath = fpath.relative_to(top_level)

    msg = f"Would you like me to create a basic PipelineRun into the file {relpath} ?"
    if not assume_yes and not prompter.confirm(msg, default=True):
        return None

    if not fpath.parent.is_dir():
        try:
            fpath.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise GenerateError(f"cannot create {fpath.parent}: {e}") from e
        out.write(f"{INFO_ICON} Directory {style.bold(TEKTON_DIR)} has been created.\n")

    if fpath.exists() and not assume_yes:
        msg = f"There is already a file named: {fpath} would you like me to override it?"
        if not prompter.confirm(msg, default=False):
            return None

    content = render_pipelinerun(top_level.name, event_type, branch)
    try:
        fpath.write_text(content, encoding="utf-8")
    except OSError as e:
        raise GenerateError(f"cannot write {fpath}: {e}") from e
    LOG.debug("Wrote %s (event=%s, branch=%s)", fpath, event_type, branch)

    success = style.state(DisplayState.SUCCEEDED, DisplayState.SUCCEEDED.icon)
    out.write(
        f"{success} A basic template has been created in {style.bold(str(fpath))}, feel free to customize it.\n"
    )
    out.write(f"{INFO_ICON} You can test your pipeline manually with: ")
    out.write(f"tkn-pac resolve -f {relpath} | kubectl create -f-\n")
    return fpath


def run_generate(
    args: argparse.Namespace,
    prompter: Prompter | None = None,
    cwd: Path | None = None,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Run generate; return the process exit code."""
    out = out or sys.stdout
    err = err or sys.stderr
    try:
        top_level = git_top_level(cwd or Path.cwd())
        generate(
            top_level,
            prompter or ConsolePrompter(out),
            out,
            event_type=args.event_type,
            branch=args.branch,
            assume_yes=args.yes,
        )
    except (GitError, GenerateError) as e:
        err.write(f"Error: {e}\n")
        return 1
    except (KeyboardInterrupt, EOFError):
        err.write("\n")
        return 130
    return 0
