"""
utils/logger.py

Configurable logging utility for the product_info_processor project.
Provides `get_logger()` which returns a configured `logging.Logger` instance
with file rotation (size-based or time-based), optional console output on
stderr, and an optional simple JSON formatter.

Console output goes to stderr so CLI commands can keep stdout for HTML/JSON.

Example:
    from utils.logger import get_logger
    logger = get_logger("extractor", rotation="size")
    logger.info("split input", extra={"blocks": 2})

"""
from __future__ import annotations

import json
import logging
import logging.handlers
from pathlib import Path
from typing import Optional

from config.settings import settings


# Attributes every LogRecord carries; anything else came in through `extra=`
_RESERVED_ATTRS = frozenset(
    (
        "name", "msg", "args", "levelname", "levelno", "pathname", "filename",
        "module", "exc_info", "exc_text", "stack_info", "lineno", "funcName",
        "created", "msecs", "relativeCreated", "thread", "threadName",
        "processName", "process", "taskName", "message", "asctime",
    )
)


class JsonFormatter(logging.Formatter):
    """Simple JSON formatter for logs.

    Produces one-line JSON objects with timestamp, level, logger name and message.
    """

    def format(self, record: logging.LogRecord) -> str:
        record_dict = {
            "ts": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            record_dict["exc_info"] = self.formatException(record.exc_info)
        extras = {
            k: v for k, v in record.__dict__.items() if k not in _RESERVED_ATTRS
        }
        if extras:
            record_dict["extra"] = extras  # type: ignore
        return json.dumps(record_dict, default=str, ensure_ascii=False)


def _resolve_level(level: Optional[int]) -> int:
    if level is not None:
        return level
    resolved = logging.getLevelName(settings.LOG_LEVEL)
    return resolved if isinstance(resolved, int) else logging.INFO


def get_logger(
    name: str,
    log_file: Optional[str] = None,
    level: Optional[int] = None,
    rotation: str = "size",
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    when: str = "midnight",
    interval: int = 1,
    console: bool = True,
    use_json: Optional[bool] = None,
    fmt: Optional[str] = None,
    datefmt: str = "%Y-%m-%d %H:%M:%S",
) -> logging.Logger:
    """Return a configured logger.

    Parameters
    ----------
    name: str
        Logger name (also used for default file name when log_file is None).
    log_file: Optional[str]
        Path to the log file. If omitted, defaults to `{LOGS_DIR}/{name}.log`.
    level: Optional[int]
        Logging level from the `logging` module. Defaults to `LOG_LEVEL`.
    rotation: str
        One of `"size"` (RotatingFileHandler) or `"time"` (TimedRotatingFileHandler).
    max_bytes: int
        Max bytes for size-based rotation.
    backup_count: int
        Number of backup files to keep.
    when: str
        When to rotate for time-based rotation (see TimedRotatingFileHandler docs).
    interval: int
        Interval multiplier for time-based rotation.
    console: bool
        Add a stderr console handler in addition to the file handler.
    use_json: Optional[bool]
        Use JSON formatter for logs. Defaults to `LOG_JSON`.
    fmt: Optional[str]
        Format string for human-readable logs. Defaults to "%(asctime)s - %(name)s - %(levelname)s - %(message)s".
    datefmt: str
        Date format used in logs.

    Returns
    -------
    logging.Logger
        Configured logger instance.
    """

    level = _resolve_level(level)
    if use_json is None:
        use_json = settings.LOG_JSON

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove all existing handlers so reconfiguring works predictably
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    if not log_file:
        logs_dir = Path(settings.LOGS_DIR)
        logs_dir.mkdir(parents=True, exist_ok=True)
        log_file = str(logs_dir / f"{name}.log")
    else:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    if use_json:
        formatter: logging.Formatter = JsonFormatter(datefmt=datefmt)
    else:
        human_fmt = fmt or "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        formatter = logging.Formatter(human_fmt, datefmt=datefmt)

    if rotation == "time":
        file_handler: logging.Handler = logging.handlers.TimedRotatingFileHandler(
            filename=log_file,
            when=when,
            interval=interval,
            backupCount=backup_count,
            encoding="utf-8",
            utc=False,
        )
    else:
        # default to size-based rotation
        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )

    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if console:
        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(level)
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

    # Propagate False so logs don't get duplicated by root logger
    logger.propagate = False

    return logger
