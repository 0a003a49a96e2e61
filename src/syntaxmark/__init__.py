"""syntaxmark - render C source files as syntax-highlighted HTML.

A two-pass highlighter: a byte-at-a-time pattern scanner records where
markup belongs, then a renderer re-reads the file and weaves that markup,
line anchors and line numbers around the raw bytes.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from syntaxmark.config import LogConfig

__version__ = "0.1.0"

_PACKAGE_LOGGER = "syntaxmark"


def configure_logging(config: LogConfig) -> None:
    """Configure the package logger with a stderr handler and optional file.

    Handlers installed by an earlier call are replaced, so repeated CLI
    invocations in one process do not duplicate output.
    """
    package_logger = logging.getLogger(_PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    package_logger.setLevel(config.level)

    # Console handler - less verbose, on stderr
    console_handler = logging.StreamHandler()
    console_handler.setLevel(config.level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    package_logger.addHandler(console_handler)

    if config.file is not None:
        # File handler - detailed logging with rotation (10MB, keep 5 backups)
        config.file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            config.file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        package_logger.addHandler(file_handler)
        package_logger.setLevel(logging.DEBUG)
        package_logger.debug("Logging configured. Log file: %s", config.file.absolute())
