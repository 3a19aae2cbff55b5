"""
Structured logging configuration for stream binding applications.

Library modules only obtain loggers; handlers are installed here, by the CLI
or by an application that wants streambind's diagnostics.

Environment Variables:
    STREAMBIND_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR) - default: INFO
    STREAMBIND_LOG_FORMAT: Log format (json, text) - default: text

Usage:
    from streambind.logging_config import setup_logging, get_logger

    setup_logging(level="DEBUG", fmt="json")
    logger = get_logger(__name__, stream="todo")
    logger.info("Applied event")
"""

import logging
import os
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger


LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def setup_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """
    Configure root logger.

    Args:
        level: Log level name; falls back to STREAMBIND_LOG_LEVEL, then INFO
        fmt: "json" or "text"; falls back to STREAMBIND_LOG_FORMAT, then text
    """
    log_level = (level or os.getenv("STREAMBIND_LOG_LEVEL", "INFO")).upper()
    log_format = (fmt or os.getenv("STREAMBIND_LOG_FORMAT", "text")).lower()

    numeric_level = LEVEL_MAP.get(log_level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    handler.addFilter(StreamNameFilter())

    if log_format == "json":
        formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s %(stream)s",
            rename_fields={
                "asctime": "timestamp",
                "name": "logger",
                "levelname": "level",
            },
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s [stream=%(stream)s]",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


def get_logger(name: str, stream: Optional[str] = None) -> logging.LoggerAdapter:
    """
    Get a logger tagged with a stream name.

    Args:
        name: Logger name (typically __name__)
        stream: Stream name for correlating logs

    Returns:
        LoggerAdapter with stream in extra fields
    """
    logger = logging.getLogger(name)
    return logging.LoggerAdapter(logger, {"stream": stream or "N/A"})


class StreamNameFilter(logging.Filter):
    """
    Logging filter that adds a stream field to all log records.

    Records from plain module loggers get stream="N/A".
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "stream"):
            record.stream = "N/A"  # type: ignore
        return True
