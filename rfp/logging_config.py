"""Logging setup for the command line and batch imports."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

FILE_FORMAT = '%(asctime)s %(levelname)-8s %(name)s [%(filename)s:%(lineno)d] %(message)s'
CONSOLE_FORMAT = '%(levelname)s: %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(
    log_dir: Optional[Path] = None,
    level: int = logging.INFO,
    log_to_file: bool = True,
    log_to_console: bool = True,
) -> logging.Logger:
    """
    Attach handlers to the "rfp" logger, replacing any set up before.

    Every module logs through a child logger ("rfp.parser", "rfp.scoring",
    ...), so this single call controls the whole package. The log file is
    named after the start time, e.g. logs/rfp_20250301_143000.log.

    Example:
        from rfp.logging_config import setup_logging
        setup_logging(level=logging.DEBUG, log_to_file=False)
    """
    logger = logging.getLogger('rfp')
    logger.setLevel(level)
    logger.handlers.clear()

    if log_to_file:
        log_dir = Path(log_dir or 'logs')
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f'rfp_{datetime.now():%Y%m%d_%H%M%S}.log'

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(file_handler)

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str = 'rfp') -> logging.Logger:
    """Logger under the package namespace; unconfigured until setup_logging()."""
    if name != 'rfp' and not name.startswith('rfp.'):
        name = f'rfp.{name}'
    return logging.getLogger(name)
