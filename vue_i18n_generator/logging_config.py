"""Logger setup shared by the generator modules and the command line entry point."""
import logging
import os
import sys
from typing import Optional, TextIO

from tqdm import tqdm

LOGGER_NAME = "vue_i18n_generator"
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


class TqdmLoggingHandler(logging.Handler):
    """
    Console handler for the generator logger. Records go through
    tqdm.write, so they are printed above the "Writing locale modules"
    progress bar instead of breaking it.
    """

    def __init__(self, stream: Optional[TextIO] = None, level=logging.NOTSET):
        super().__init__(level)
        self.stream = stream

    def emit(self, record):
        try:
            tqdm.write(self.format(record), file=self.stream or sys.stderr)
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)


def _file_handler(log_file_path: str) -> logging.FileHandler:
    log_dir = os.path.dirname(log_file_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    return logging.FileHandler(log_file_path, encoding='utf-8')


def setup_logger(log_level_str: str, log_file_path: str, log_to_console: bool) -> logging.Logger:
    """
    Configure the `vue_i18n_generator` logger.

    Calling it again replaces the handlers of the previous call.

    Args:
        log_level_str: Level name such as 'INFO' or 'debug'. Unknown names mean INFO.
        log_file_path: Log file, created with its directory. Empty disables file logging.
        log_to_console: Also log to stderr through tqdm.

    Returns:
        The configured logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, log_level_str.upper(), logging.INFO))
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers = []
    if log_file_path:
        handlers.append(_file_handler(log_file_path))
    if log_to_console:
        handlers.append(TqdmLoggingHandler())

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
