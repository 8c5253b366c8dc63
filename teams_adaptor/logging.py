"""Logging from config and env.

Levels (inclusive):
- CRITICAL: fatal errors only
- ERROR: failed notifications and CRITICAL
- WARN / WARNING: non-critical issues and ERROR
- INFO: service messages, WARN, and ERROR
- DEBUG: request bodies and all levels above
- NONE: nothing

Trace output (TRACE, below DEBUG) is enabled separately with
RLOG_TRACE_LEVEL >= 0, whatever the log level is.
"""

import logging

from teams_adaptor.config import LoggingConfig

TRACE = 5
NONE = logging.CRITICAL + 10

logging.addLevelName(TRACE, "TRACE")

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
    "NONE": NONE,
}

DEFAULT_LEVEL = "INFO"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _resolve_level(level: str) -> int:
    """Map level name to logging constant.

    Falls back to INFO if unknown.
    """
    return LEVELS.get(level.upper().strip(), logging.INFO)


class AdaptorLogging:
    """Configures root logger from LoggingConfig (env RLOG_*)."""

    def __init__(self, config: LoggingConfig) -> None:
        """Store logging config (level, trace level and format)."""
        self._level = _resolve_level(config.log_level)
        if config.trace_enabled:
            self._level = TRACE
        self._format = config.format or DEFAULT_FORMAT

    @property
    def level(self) -> int:
        return self._level

    def setup(self) -> None:
        """Apply level and format to the root logger."""
        logging.basicConfig(
            level=self._level,
            format=self._format,
            force=True,
        )

    def get_logger(self, name: str) -> logging.Logger:
        """Return a logger with the given name (uses root config)."""
        return logging.getLogger(name)
