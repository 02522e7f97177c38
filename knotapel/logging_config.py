"""
Logging configuration for knotapel.

Modules log under the "knotapel" namespace. Scene recomputes and
convergence are reported at INFO; relaxation state creation and every
periodic resample are reported at DEBUG, which is noisy while a viewer
runs its frame loop, so the relaxation logger gets its own level.
"""
import logging
import sys
from typing import Optional, Union

PACKAGE_LOGGER = "knotapel"
RELAXATION_LOGGER = "knotapel.relaxation"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _as_level(level: Union[int, str]) -> int:
    if isinstance(level, str):
        value = logging.getLevelName(level.upper())
        if not isinstance(value, int):
            raise ValueError(f"Unknown logging level: {level!r}")
        return value
    return level


def setup_logging(level: Union[int, str] = logging.INFO,
                  log_file: Optional[str] = None,
                  relaxation_level: Union[int, str, None] = logging.INFO) -> logging.Logger:
    """
    Configure the knotapel package logger.

    Args:
        level: Package level, as a number or a name such as "debug"
        log_file: Optional path to also write logs to
        relaxation_level: Level for knotapel.relaxation; None inherits `level`.
            Defaults to INFO so per-resample debug lines stay quiet.

    Returns:
        The configured package logger.
    """
    level = _as_level(level)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Calling again replaces handlers instead of duplicating output
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    relaxation_logger = logging.getLogger(RELAXATION_LOGGER)
    if relaxation_level is None:
        relaxation_logger.setLevel(logging.NOTSET)
    else:
        relaxation_logger.setLevel(_as_level(relaxation_level))

    logger.debug("Logging initialized at %s", logging.getLevelName(level))
    return logger
