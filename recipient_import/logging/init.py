from __future__ import annotations

import logging
import sys
from typing import TextIO

"""Application logger for the recipient importer.

Every line the CLI prints goes through the 'recipient_import' logger as
'<LABEL> <message>', LABEL being one of INFO | WARN | ERROR | SUMMARY (and
DEBUG with --debug). Library modules use logging.getLogger(__name__), so
their records reach the same handler; DEBUG lines from them carry the module
path, e.g. 'DEBUG [matching.engine] match: field=phone column=Mobile ...'.
"""

__all__ = [
    "LOGGER_NAME",
    "SUMMARY_LEVEL",
    "LabeledFormatter",
    "setup_logging",
    "get_logger",
    "set_debug",
    "log_summary",
    "reset_logging",
]

LOGGER_NAME = "recipient_import"

# INFO(20) と WARNING(30) の間
SUMMARY_LEVEL = 25

_app_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
        SUMMARY_LEVEL: "SUMMARY",
    }

    def format(self, record: logging.LogRecord) -> str:
        label = self.LABELS.get(record.levelno, record.levelname)
        message = record.getMessage()
        prefix = LOGGER_NAME + "."
        if record.levelno == logging.DEBUG and record.name.startswith(prefix):
            return f"{label} [{record.name[len(prefix):]}] {message}"
        return f"{label} {message}"


def setup_logging(level: int = logging.INFO, stream: TextIO | None = None) -> logging.Logger:
    """Install the labeled handler on the application logger.

    Idempotent: later calls return the already configured logger and ignore
    their arguments until reset_logging() is called. The logger does not
    propagate to root, so pytest / library handlers never double the output.
    """
    global _app_logger
    if _app_logger is not None:
        return _app_logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    app = logging.getLogger(LOGGER_NAME)
    app.setLevel(level)
    for old in list(app.handlers):
        app.removeHandler(old)

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(LabeledFormatter())
    app.addHandler(handler)
    app.propagate = False

    _app_logger = app
    return app


def get_logger() -> logging.Logger:
    return _app_logger if _app_logger is not None else setup_logging()


def set_debug(logger: logging.Logger) -> None:
    logger.setLevel(logging.DEBUG)
    for h in logger.handlers:
        h.setLevel(logging.DEBUG)


def log_summary(message: str) -> None:
    """Emit `message` with the SUMMARY label."""
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Forget the configured logger so the next setup_logging() rebinds the stream (tests)."""
    global _app_logger
    _app_logger = None
