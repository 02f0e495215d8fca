"""Centralized logging setup for flow-monitor.

Configures application loggers to write to stdout only. The container runtime
captures this stream.
"""
import logging
import sys


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger with a single console handler.

    Args:
        level: Log level name (e.g. "INFO", "DEBUG")
    """
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s")

    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())

    if not any(isinstance(h, logging.StreamHandler) for h in root_logger.handlers):
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(formatter)
        root_logger.addHandler(console)
