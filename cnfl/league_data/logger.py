import logging
import sys
from datetime import datetime
from pathlib import Path

from .config import LeagueConfig

PACKAGE_LOGGER = "cnfl"


def setup_logger(config: LeagueConfig, name: str = PACKAGE_LOGGER) -> logging.Logger:
    """Setup a logger with consistent formatting

    Modules log through ``logging.getLogger(__name__)``; configuring the
    package logger once is enough for all of them.
    """

    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    log_level = logging.DEBUG if config.debug else logging.INFO
    logger.setLevel(log_level)
    logger.propagate = False

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if config.log_dir:
        log_dir = Path(config.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(
            log_dir / f'cnfl_{datetime.now().strftime("%Y%m%d")}.log',
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
