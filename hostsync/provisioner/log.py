"""Logging configuration using loguru.

Everything goes to stderr; stdout carries only the command's JSON result.
stdlib records (httpx, httpcore) are routed into loguru so one format and
one redaction step apply to all of them.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable

from loguru import logger

REDACTED = "***"

CLI_FORMAT = "<level>{level: <8}</level> | <level>{message}</level>"

DEBUG_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

# INFO on these would print every request URL and connection event.
QUIET_LOGGERS = ("httpx", "httpcore", "hpack", "asyncio")


class _InterceptHandler(logging.Handler):
    """Bridge stdlib logging records into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip logging's own frames so the call-site is the library's
        frame = logging.currentframe()
        depth = 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _redactor(secrets: Iterable[str]):
    values = sorted({secret for secret in secrets if secret}, key=len, reverse=True)

    def patch(record) -> None:
        message = record["message"]
        for value in values:
            message = message.replace(value, REDACTED)
        record["message"] = message

    return patch


def setup_logging(level: str = "INFO", *, secrets: Iterable[str] = ()) -> None:
    """Configure loguru as the sole logging sink on stderr.

    Any occurrence of a value in ``secrets`` is masked in every message.
    Tracebacks never include local variable values.
    """
    level = level.upper()

    logger.remove()
    logger.configure(patcher=_redactor(secrets))
    logger.add(
        sys.stderr,
        level=level,
        format=DEBUG_FORMAT if level in ("TRACE", "DEBUG") else CLI_FORMAT,
        colorize=sys.stderr.isatty(),
        backtrace=False,
        diagnose=False,
    )

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.debug("Logging initialised (level={})", level)
