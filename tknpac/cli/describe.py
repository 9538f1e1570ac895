"""`tknpac describe NAME`: print the run history of a Repository."""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import TextIO

from tknpac.adapters import (
    FileRepositoryClient,
    KubernetesRepositoryClient,
    RepositoryClient,
    RepositoryClientError,
)
from tknpac.clock import Clock, SystemClock
from tknpac.config import AppConfig
from tknpac.namespace import current_namespace, resolve_namespace
from tknpac.report import AnsiStyle, PlainStyle, Style, render

LOG = logging.getLogger("tknpac.cli.describe")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for describe."""
    parser = argparse.ArgumentParser(
        prog="tknpac describe",
        description="Describe a Repository and the PipelineRuns it recorded",
    )
    parser.add_argument("name", help="Repository name")
    parser.add_argument(
        "--namespace",
        "-n",
        default="",
        help="Namespace of the Repository (default: current context namespace)",
    )
    parser.add_argument(
        "--filename",
        "-f",
        type=Path,
        default=None,
        help="Read Repository manifests from a YAML file instead of the cluster",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colors and hyperlinks",
    )
    return parser.parse_args(argv)


def select_style(config: AppConfig, no_color: bool, out: TextIO) -> Style:
    """ANSI style only for a terminal, unless disabled by flag, config or
    NO_COLOR."""
    if no_color or config.display.no_color or os.environ.get("NO_COLOR"):
        return PlainStyle()
    if not (hasattr(out, "isatty") and out.isatty()):
        return PlainStyle()
    return AnsiStyle(hyperlinks=config.display.hyperlinks)


def describe(
    client: RepositoryClient,
    clock: Clock,
    name: str,
    context_namespace: str,
    override_namespace: str,
    out: TextIO,
    style: Style | None = None,
) -> None:
    """Fetch name in the effective namespace and write its report to out.

    Fetch errors propagate unchanged; nothing is written in that case.
    """
    namespace = resolve_namespace(context_namespace, override_namespace)
    LOG.debug("Describing repository %s in namespace %s", name, namespace)
    repo = client.fetch(name, namespace)
    out.write(render(repo, clock, style))


def run_describe(
    args: argparse.Namespace,
    config: AppConfig,
    client: RepositoryClient | None = None,
    clock: Clock | None = None,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Run describe; return the process exit code."""
    out = out or sys.stdout
    err = err or sys.stderr
    context_namespace = current_namespace(config.kube)
    # clients built here are closed here; injected ones belong to the caller
    owned = client is None
    try:
        if client is None:
            if args.filename is not None:
                client = FileRepositoryClient(args.filename, default_namespace=context_namespace)
            else:
                client = KubernetesRepositoryClient.from_config(config)
        describe(
            client,
            clock or SystemClock(),
            args.name,
            context_namespace,
            args.namespace,
            out,
            select_style(config, args.no_color, out),
        )
    except RepositoryClientError as e:
        err.write(f"Error: {e}\n")
        return 1
    finally:
        if owned and client is not None:
            client.close()
    return 0
