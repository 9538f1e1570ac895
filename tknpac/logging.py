"""Diagnostics for the tknpac commands.

The report is the only thing written to stdout; every log record goes to
stderr. The level comes from the config file (logging.level) or env
(LOGGING_LEVEL), and ``--verbose`` turns on DEBUG for tknpac itself, which
includes the API paths requested and records skipped as malformed.
"""

import logging
import sys

from tknpac.config import LoggingConfig

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

DEFAULT_LEVEL = "WARNING"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# HTTP stack loggers that stay at WARNING unless --verbose is given
NOISY_LOGGERS = ("urllib3",)


def _resolve_level(level: str) -> int:
    """Level constant for a configured name; unknown names mean INFO."""
    return LEVELS.get(level.upper().strip(), logging.INFO)


class PacLogging:
    """Applies LoggingConfig to the root logger for one CLI invocation."""

    def __init__(self, config: LoggingConfig, verbose: bool = False) -> None:
        self._verbose = verbose
        self._level = logging.DEBUG if verbose else _resolve_level(config.level)
        self._format = config.format or DEFAULT_FORMAT

    def setup(self) -> None:
        """Send records at the configured level to stderr."""
        logging.basicConfig(
            level=self._level,
            format=self._format,
            stream=sys.stderr,
            force=True,
        )
        quiet = logging.NOTSET if self._verbose else max(self._level, logging.WARNING)
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(quiet)
