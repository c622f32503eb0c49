# logger_utils.py - for logging messages and performance metrics (load/build timings etc)

import logging
import time

# Everything in the package logs under this namespace; the host app decides
# where it goes (no handlers are installed here).
LOGGER_NAME = "emoji_picker"
logger = logging.getLogger(LOGGER_NAME)
metrics_logger = logging.getLogger(LOGGER_NAME + ".metrics")


class Log:
    """Lightweight facade for writing messages and tracking metrics."""

    LEVELS = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
    }

    @staticmethod
    def write(msg: str, level: str = "INFO") -> None:
        """Log `msg` at the named level (unknown levels fall back to INFO)."""
        logger.log(Log.LEVELS.get(level.upper(), logging.INFO), msg)

    # Public logging methods
    @staticmethod
    def debug(msg: str) -> None:
        Log.write(msg, "DEBUG")

    @staticmethod
    def info(msg: str) -> None:
        Log.write(msg, "INFO")

    @staticmethod
    def warning(msg: str) -> None:
        Log.write(msg, "WARNING")

    @staticmethod
    def error(msg: str) -> None:
        Log.write(msg, "ERROR")

    @staticmethod
    def metric(tag, value, unit=""):
        """
        Record a metric (timing, counts, sizes).
        Example: "index build done: 0.042s"
        """
        metrics_logger.info("%s: %s%s", tag, value, unit)

    @staticmethod
    def time_block(label):
        """
        Helper for measuring execution time of a code block.
        To use:
            with Log.time_block("index build"):
                build()
        It logs how long the block took as a metric.
        """
        return _Timer(label)


class _Timer:
    """Context manager used internally to measure time for a code block."""
    def __init__(self, label):
        self.label = label
        self.start = time.perf_counter()
        self.elapsed = 0.0

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        """When exiting the 'with' block, calculate how long it took and record it as a metric."""
        self.elapsed = round(time.perf_counter() - self.start, 4)
        suffix = " failed" if exc_type is not None else " done"
        Log.metric(f"{self.label}{suffix}", self.elapsed, "s")
        return False
