"""tknpac entry point.

Two commands: describe (report the runs recorded on a Repository) and
generate (scaffold a starter PipelineRun). Usage: tknpac describe NAME |
tknpac generate.
"""

import argparse
import logging
import sys
from pathlib import Path

from tknpac import __version__
from tknpac.config import DEFAULT_CONFIG_PATH, load_config
from tknpac.logging import PacLogging

COMMANDS = {"describe": "describe", "desc": "describe", "generate": "generate", "gen": "generate"}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse global options; the subcommand's own arguments end up in
    ``rest``."""
    argv = argv if argv is not None else sys.argv[1:]

    parser = argparse.ArgumentParser(
        prog="tknpac",
        description="tknpac - describe Pipelines-as-Code repositories or generate a starter PipelineRun",
        usage="tknpac [--config PATH] [--verbose] {describe,generate} ...",
        allow_abbrev=False,
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help="Path to YAML config file",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Debug logging on stderr",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parsed, rest = parser.parse_known_args(argv)

    # only global options may precede the command; its own options follow it
    if not rest:
        parser.error("a command is required: describe or generate")
    if rest[0].startswith("-"):
        parser.error(f"unrecognized option before the command: {rest[0]} (command options go after the command)")
    parsed.subcommand = COMMANDS.get(rest[0])
    if parsed.subcommand is None:
        parser.error(f"unknown command: {rest[0]}")
    parsed.rest = rest[1:]
    return parsed


def main(argv: list[str] | None = None) -> int:
    """Entry point: dispatch to describe or generate."""
    args = parse_args(argv)
    config = load_config(args.config)
    PacLogging(config.logging, verbose=args.verbose).setup()

    if args.subcommand == "generate":
        from tknpac.cli.generate import parse_args as generate_parse
        from tknpac.cli.generate import run_generate

        return run_generate(generate_parse(args.rest))

    from tknpac.cli.describe import parse_args as describe_parse
    from tknpac.cli.describe import run_describe

    try:
        return run_describe(describe_parse(args.rest), config)
    except KeyboardInterrupt:
        return 130
    except Exception as e:
        logging.getLogger("tknpac.describe").exception("Fatal error: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
