# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Loguru setup shared by the web app and the CLI commands.

Every record carries the request correlation id and, once the session
check has run, the id of the authenticated user. Both live in context
variables so worker threads of a threaded server never mix them up.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from pathlib import Path

from loguru import logger as _root

from .sensitive_filter import sanitize_record

_FMT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[correlation_id]}</magenta> "
    "<yellow>u={extra[user_id]}</yellow> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)

_CORRELATION_ID: ContextVar[str] = ContextVar("correlation_id", default="-")
_USER_ID: ContextVar[str] = ContextVar("user_id", default="-")


def _inject_context(record) -> None:
    record["extra"].setdefault("correlation_id", _CORRELATION_ID.get())
    record["extra"].setdefault("user_id", _USER_ID.get())


logger = _root.patch(_inject_context)


class _StdlibBridge(logging.Handler):
    """Routes werkzeug and SQLAlchemy logging into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _root.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def set_correlation_id(value: str | None) -> None:
    _CORRELATION_ID.set(value or "-")


def get_correlation_id() -> str:
    return _CORRELATION_ID.get()


def set_log_user(user_id: int | None) -> None:
    _USER_ID.set(str(user_id) if user_id is not None else "-")


def clear_request_context() -> None:
    _CORRELATION_ID.set("-")
    _USER_ID.set("-")


def setup_logging(
    level: str | None = None,
    *,
    debug_mode: bool = False,
    log_file: Path | str | None = None,
) -> None:
    level = "DEBUG" if debug_mode else (level or "INFO").upper()

    _root.remove()
    _root.add(
        sys.stderr,
        level=level,
        format=_FMT,
        colorize=True,
        backtrace=debug_mode,
        diagnose=False,
        filter=sanitize_record,
    )
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        _root.add(
            str(log_file),
            level=level,
            format=_FMT,
            colorize=False,
            rotation="10 MB",
            retention=5,
            enqueue=True,
            encoding="utf-8",
            filter=sanitize_record,
        )

    logging.basicConfig(handlers=[_StdlibBridge()], level=0, force=True)
    logging.getLogger("werkzeug").setLevel(logging.INFO if debug_mode else logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


__all__ = [
    "clear_request_context",
    "get_correlation_id",
    "logger",
    "set_correlation_id",
    "set_log_user",
    "setup_logging",
]
