"""Run git commands needed by the CLI."""

import logging
import subprocess
from pathlib import Path

LOG = logging.getLogger("tknpac.services.git")


class GitError(Exception):
    """Raised when a git command fails."""

    pass


def _run_git(args: list[str], cwd: Path) -> str:
    """Run git command and return stripped stdout; raise GitError on
    non-zero exit."""
    cmd = ["git"] + args
    try:
        result = subprocess.run(cmd, cwd=cwd, check=True, capture_output=True, text=True, timeout=60)
    except subprocess.CalledProcessError as e:
        err = (e.stderr or e.stdout or "").strip()
        LOG.debug("Git %s failed: %s", args, err)
        raise GitError(f"git {' '.join(args)}: {err}") from e
    except FileNotFoundError as e:
        raise GitError("git not found") from e
    return result.stdout.strip()


def git_top_level(cwd: Path) -> Path:
    """Top-level directory of the work tree containing cwd."""
    out = _run_git(["rev-parse", "--show-toplevel"], cwd)
    if not out:
        raise GitError(f"{cwd} is not inside a git work tree")
    return Path(out)
