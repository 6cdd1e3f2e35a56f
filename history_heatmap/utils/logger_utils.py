# logger_utils.py - logging setup and timing of code blocks

import logging
import time
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

# Root logger for the package, modules log through getLogger(__name__)
LOGGER_NAME = "history_heatmap"

# Plain format for the optional log file (the console side is formatted by rich)
FILE_FORMAT = "[%(asctime)s] %(levelname)-7s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class Log:
    """Logging configuration plus a timer for measuring code blocks."""

    @staticmethod
    def setup(verbose: bool = False, path: Optional[str] = None) -> logging.Logger:
        """
        Route package logs to stderr through rich (stdout carries the report).
        WARNING and up by default, DEBUG when verbose.
        If `path` is given, the same records are appended to that file.
        """
        logger = logging.getLogger(LOGGER_NAME)
        level = logging.DEBUG if verbose else logging.WARNING
        logger.setLevel(level)

        # drop handlers from a previous setup (tests call main() repeatedly)
        for h in list(logger.handlers):
            logger.removeHandler(h)
            h.close()

        console = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=verbose,
        )
        console.setLevel(level)
        logger.addHandler(console)

        if path:
            fh = logging.FileHandler(path, encoding="utf-8")
            fh.setFormatter(logging.Formatter(FILE_FORMAT, DATE_FORMAT))
            fh.setLevel(logging.DEBUG)
            logger.addHandler(fh)

        logger.propagate = False
        return logger

    @staticmethod
    def time_block(label: str, logger: Optional[logging.Logger] = None) -> "_Timer":
        """
        Helper for measuring execution time of a code block.
        To use:
            with Log.time_block("history parse"):
                do_some_work()
        The duration is logged at DEBUG level when the block exits.
        """
        return _Timer(label, logger or logging.getLogger(LOGGER_NAME))


class _Timer:
    """Context manager used internally to measure time for a code block."""

    def __init__(self, label: str, logger: logging.Logger):
        self.label = label
        self.logger = logger
        self.start = 0.0
        self.elapsed = 0.0

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.elapsed = time.perf_counter() - self.start
        if exc_type is None:
            self.logger.debug("%s done in %.3fs", self.label, self.elapsed)
        else:
            self.logger.debug("%s failed after %.3fs", self.label, self.elapsed)
        return False
