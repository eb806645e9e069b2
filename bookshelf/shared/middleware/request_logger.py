# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Per-request log lines with a correlation id.

The id comes from ``X-Request-ID`` when the caller sends one and is
echoed back on the response, so a client report can be matched to the
server log. Cookies never reach the log; only a short digest of the
session cookie is printed in debug mode.
"""

from __future__ import annotations

import hashlib
import secrets
import time

from flask import Flask, g, request

from bookshelf.shared.logging import (
    clear_request_context,
    get_correlation_id,
    logger,
    set_correlation_id,
    set_log_user,
)

REQUEST_ID_HEADER = "X-Request-ID"


def _client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr or "unknown"


def _cookie_digest(cookie_name: str) -> str:
    value = request.cookies.get(cookie_name)
    if not value:
        return "none"
    return hashlib.sha256(value.encode()).hexdigest()[:8]


def configure_request_logging(
    app: Flask, *, cookie_name: str = "sessionId", debug_mode: bool = False
) -> None:
    @app.before_request
    def _open_request() -> None:
        set_correlation_id(request.headers.get(REQUEST_ID_HEADER) or secrets.token_urlsafe(8))
        g.request_started_at = time.perf_counter()
        if debug_mode:
            logger.debug(
                f"-> {request.method} {request.path} from {_client_ip()} "
                f"session={_cookie_digest(cookie_name)} body={request.content_length or 0}b"
            )

    @app.after_request
    def _close_request(response):
        # The session check has run by now; tag the summary line with the user.
        set_log_user(getattr(g, "user_id", None))
        elapsed = time.perf_counter() - getattr(g, "request_started_at", time.perf_counter())
        logger.info(
            f"{request.method} {request.path} {response.status_code} {elapsed * 1000:.1f}ms"
        )
        response.headers[REQUEST_ID_HEADER] = get_correlation_id()
        return response

    @app.teardown_request
    def _teardown(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(f"request failed: {type(exc).__name__} on {request.method} {request.path}")
        clear_request_context()


__all__ = ["REQUEST_ID_HEADER", "configure_request_logging"]
