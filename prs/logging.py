"""Logging from config and env.

Levels (inclusive):
- ERROR: fatal errors only (search failed, bad input)
- WARNING: pull requests that could not be fetched, and ERROR
- INFO: progress messages, WARNING, and ERROR
- DEBUG: every API request and all levels above

Configure via prs.yaml (logging.level, logging.format) or env
(PRS_LOGGING_LEVEL, PRS_LOGGING_FORMAT). Records go to stderr so stdout
only carries pull request lines.
"""

import logging
import sys

from prs.config import LoggingConfig

# Supported levels only (DEBUG, INFO, WARNING, ERROR)
LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

DEFAULT_LEVEL = "WARNING"
DEFAULT_FORMAT = "%(levelname)s: %(message)s"


def _resolve_level(level: str) -> int:
    """Map level name to logging constant.

    Falls back to WARNING if unknown.
    """
    return LEVELS.get(level.upper().strip(), LEVELS[DEFAULT_LEVEL])


class PrsLogging:
    """Configures root logger from LoggingConfig (YAML + env
    PRS_LOGGING_*)."""

    def __init__(self, config: LoggingConfig) -> None:
        """Store logging config (level and format)."""
        self._level = _resolve_level(config.level)
        self._format = config.format or DEFAULT_FORMAT

    def setup(self) -> None:
        """Apply level and format to the root logger, writing to stderr."""
        logging.basicConfig(
            level=self._level,
            format=self._format,
            stream=sys.stderr,
            force=True,
        )
