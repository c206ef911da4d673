"""
PNGSECRET Logger
Logging setup shared by the CLI and the chunk codec.
"""

import logging
import sys
import time
from functools import wraps
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Callable

from config import LOGGING_SETTINGS


def setup_logger(name, level=None):
    """
    Create and configure a logger.

    Args:
        name: logger name (usually ``__name__``)
        level: log level name; defaults to the configured level

    Returns:
        logging.Logger: the configured logger
    """
    logger = logging.getLogger(name)

    # Avoid stacking handlers on repeated calls
    if logger.handlers:
        if level is not None:
            _apply_level(logger, level)
        return logger

    if level is None:
        level = LOGGING_SETTINGS.get("level", "INFO")

    log_dir = Path(LOGGING_SETTINGS.get("log_dir", "logs"))
    log_dir.mkdir(exist_ok=True)
    log_file = log_dir / LOGGING_SETTINGS.get("log_file", "pngsecret.log")

    # Rotating file handler
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=LOGGING_SETTINGS.get("max_bytes", 2 * 1024 * 1024),
        backupCount=LOGGING_SETTINGS.get("backup_count", 3),
        encoding="utf-8",
    )

    # Console output goes to stderr so command output on stdout stays clean
    console_handler = logging.StreamHandler(sys.stderr)

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler.setFormatter(formatter)
    console_handler.setFormatter(formatter)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)
    _apply_level(logger, level)

    return logger


def _apply_level(logger, level):
    value = getattr(logging, str(level).upper(), logging.INFO)
    logger.setLevel(value)
    for handler in logger.handlers:
        handler.setLevel(value)


def log_operation(arg, operation=None, status="SUCCESS", details=None, expected=()):
    """Record the outcome of a CLI operation.

    As a decorator, ``@log_operation("Encode", expected=(PNGChunkError,))``
    logs the start at DEBUG and the completion with its elapsed time at INFO.
    Failures of an ``expected`` type are logged as one line; anything else is
    logged with its traceback. Called directly,
    ``log_operation(logger, "Encode", details="ruSt -> out.png")`` writes a
    single status line.
    """

    if operation is None and isinstance(arg, str):
        operation_name = arg
        expected_errors = tuple(expected)

        def decorator(func: Callable):
            @wraps(func)
            def wrapper(*args, **kwargs):
                logger = logging.getLogger(func.__module__)
                logger.debug("[%s] Started", operation_name)
                started = time.perf_counter()
                try:
                    result = func(*args, **kwargs)
                except expected_errors as exc:
                    logger.error("[%s] FAILED: %s", operation_name, exc)
                    raise
                except Exception:
                    logger.error("[%s] FAILED unexpectedly", operation_name, exc_info=True)
                    raise
                elapsed_ms = (time.perf_counter() - started) * 1000
                logger.info("[%s] Completed in %.1f ms", operation_name, elapsed_ms)
                return result

            return wrapper

        return decorator

    if operation is not None:
        logger = arg
        msg = f"[{operation}] Status: {status}"
        if details:
            msg += f" | Details: {details}"
        level = logging.ERROR if status and status.upper() == "FAILED" else logging.INFO
        logger.log(level, msg)
        return None

    raise TypeError(
        "log_operation must be used as a decorator with an operation name "
        "or called with a logger and an operation name"
    )
