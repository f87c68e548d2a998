# navconnector/utils/logger.py
"""
Logging configuration for the navconnector package.

All modules log through ``logging.getLogger(__name__)``, so configuring the
package-level ``navconnector`` logger once is enough for every module.
"""

import logging
from pathlib import Path
from sys import stdout

from .config_loader import LoggingSection

PACKAGE_LOGGER_NAME: str = 'navconnector'

LOG_FORMAT: str = '%(asctime)s - %(levelname)-8s - [%(name)s] - %(message)s'
LOG_DATE_FORMAT: str = '%Y-%m-%d %H:%M:%S'


def setup_logger(
    logging_level: int = logging.INFO,
    log_file_path: Path | None = None,
) -> logging.Logger:
    """
    Set up logging for the navconnector package.

    Calling this more than once only updates the level of the existing
    handlers; no duplicate handler is ever attached.

    Args:
        logging_level: The logging level to use. Defaults to INFO.
        log_file_path: Optional log file. If None, logs go to stdout.

    Returns:
        The configured package logger.

    Example:
        >>> logger = setup_logger(logging_level=logging.DEBUG)
        >>> logger = setup_logger(log_file_path=Path('logs/nav.log'))
    """
    package_logger: logging.Logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel(logging_level)

    log_format: logging.Formatter = logging.Formatter(
        fmt=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )

    if not package_logger.handlers:
        handler: logging.Handler
        if log_file_path is not None:
            log_file_path.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(
                filename=str(log_file_path),
                mode='a',
                encoding='utf-8',
            )
        else:
            handler = logging.StreamHandler(stdout)

        handler.setFormatter(log_format)
        handler.setLevel(logging_level)
        package_logger.addHandler(handler)

        if log_file_path is not None:
            package_logger.info('Logging to file: %s', log_file_path)
    else:
        # Reconfiguring: keep the handlers, follow the new level
        for existing_handler in package_logger.handlers:
            existing_handler.setLevel(logging_level)

    return package_logger


def setup_logger_from_config(logging_config: LoggingSection) -> logging.Logger:
    """
    Set up package logging from the 'logging' section of the configuration.

    File logging wins when a file path is configured; otherwise the console
    level is used.
    """
    file_level: int | None = logging_config.get_file_level_int()
    if logging_config.file_path is not None and file_level is not None:
        return setup_logger(
            logging_level=file_level,
            log_file_path=logging_config.file_path,
        )
    return setup_logger(logging_level=logging_config.get_console_level_int())
