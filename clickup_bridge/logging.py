"""Logging setup for a single bridge run.

Configure via config.yaml (logging.level, logging.format) or env (LOGGING_LEVEL,
LOGGING_FORMAT). Under GitHub Actions (GITHUB_ACTIONS=true) records go to
stdout and ERROR / WARNING records are emitted as workflow commands
(``::error::`` / ``::warning::``), so failed ClickUp or GitHub calls show up
as annotations on the run.
"""

import logging
import os
import sys

from clickup_bridge.config import LoggingConfig

# Supported levels only (DEBUG, INFO, WARNING, ERROR)
LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _resolve_level(level: str) -> int:
    """Map level name to logging constant.

    Falls back to INFO if unknown.
    """
    return LEVELS.get(level.upper().strip(), logging.INFO)


def _escape_command_data(text: str) -> str:
    """Escape text for a workflow command so multi-line output stays one annotation."""
    return text.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class ActionsAnnotationFormatter(logging.Formatter):
    """Emit ERROR and WARNING records as GitHub Actions workflow commands.

    Annotations carry the message (and traceback) only; the runner adds its
    own timestamp. Lower levels use the configured format.
    """

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno < logging.WARNING:
            return super().format(record)
        text = record.getMessage()
        if record.exc_info:
            text = f"{text}\n{self.formatException(record.exc_info)}"
        command = "error" if record.levelno >= logging.ERROR else "warning"
        return f"::{command}::{_escape_command_data(text)}"


def running_in_actions() -> bool:
    return os.environ.get("GITHUB_ACTIONS") == "true"


class BridgeLogging:
    """Configures root logger from LoggingConfig (YAML + env LOGGING_*)."""

    def __init__(self, config: LoggingConfig, actions: bool | None = None) -> None:
        self._level = _resolve_level(config.level)
        self._format = config.format or DEFAULT_FORMAT
        self._actions = running_in_actions() if actions is None else actions

    def setup(self) -> None:
        """Apply level and format to the root logger."""
        if not self._actions:
            logging.basicConfig(level=self._level, format=self._format, force=True)
            return
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(ActionsAnnotationFormatter(self._format))
        logging.basicConfig(level=self._level, handlers=[handler], force=True)
