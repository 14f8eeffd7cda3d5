"""
Logging setup for IconMaker.

Library modules only create their own `logging.getLogger(__name__)`;
this module is called once by the command-line entry point and:
- Prints INFO and above to the console
- Optionally writes DEBUG and above to a timestamped log file
"""

import logging
from datetime import datetime
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(log_dir=None, verbose=False):
    """
    Configure the root logger with console and optional file output.

    Args:
        log_dir: Directory for run_*.log files (None disables file logging)
        verbose: Show DEBUG messages on the console as well

    Returns:
        tuple: (logger, log_filepath or None)
    """
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG)

    # Remove any existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    log_filepath = None
    if log_dir:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_filepath = directory / f"run_{timestamp}.log"

        file_handler = logging.FileHandler(log_filepath, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Pillow logs every PNG chunk at DEBUG level
    logging.getLogger("PIL").setLevel(logging.WARNING)

    return logger, log_filepath
