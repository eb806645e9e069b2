# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""JSON error responses for the Flask app."""

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, jsonify, request
from werkzeug.exceptions import HTTPException

from bookshelf.shared.logging import logger

from .base import AppError, ErrorKind


def handle_app_error(error: AppError) -> tuple[Response, HTTPStatus]:
    return jsonify(error.to_dict()), error.status


def register_error_handler(app: Flask, *, debug_mode: bool = False) -> None:
    """Map :class:`AppError` to its status and anything unexpected to 500.

    Bodies always have the ``{"error": <kind>, "message"?: ...}`` shape. The
    details of unexpected failures go to the log only.
    """

    @app.errorhandler(AppError)
    def _on_app_error(exc: AppError):
        where = f"{request.method} {request.path}"
        if exc.status >= HTTPStatus.INTERNAL_SERVER_ERROR:
            cause = exc.__cause__
            detail = f" (cause: {type(cause).__name__}: {cause})" if cause else ""
            logger.error(f"{exc.code} on {where}: {exc.message}{detail}")
        else:
            logger.info(f"{exc.code} on {where}")
        return handle_app_error(exc)

    @app.errorhandler(HTTPException)
    def _on_http_error(exc: HTTPException):
        # Routing errors (404 for unknown paths, 405) keep werkzeug's response.
        return exc

    @app.errorhandler(Exception)
    def _on_unexpected(exc: Exception):
        if debug_mode:
            logger.exception(f"unhandled {type(exc).__name__} on {request.method} {request.path}")
        else:
            logger.error(f"unhandled {type(exc).__name__} on {request.method} {request.path}")
        return jsonify({"error": ErrorKind.INTERNAL.value}), HTTPStatus.INTERNAL_SERVER_ERROR


__all__ = ["handle_app_error", "register_error_handler"]
