# SPDX-License-Identifier: MIT

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from punchcard import configuration

LOGGER_NAME = configuration.APP_NAME


def configure_logging(verbose: bool = False, log_file: Optional[Path] = None) -> None:
    """
    Send the punchcard logger hierarchy to a rotating file, and to stderr
    through rich when verbose.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    log_file = log_file or configuration.LOG_FILE_PATH
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file, maxBytes=512 * 1024, backupCount=2, encoding="utf-8"
        )
    except OSError:
        # Logging is best effort, an unwritable log dir must not stop a command.
        file_handler = None
    if file_handler is not None:
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        )
        logger.addHandler(file_handler)

    if verbose:
        console_handler = RichHandler(
            console=Console(stderr=True), show_path=False, markup=False
        )
        console_handler.setLevel(logging.DEBUG)
        logger.addHandler(console_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
