# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Session check applied in front of every request.

The session token travels in a cookie. Login and CORS preflight requests
pass through untouched; everything else must present a known, unexpired
session, which is prolonged and exposed to handlers via ``flask.g``.
"""

from __future__ import annotations

from collections.abc import Iterable

from flask import Flask, g, request

from bookshelf.application.services.session_manager import SessionManager
from bookshelf.domain.sessions.entities import SessionContext
from bookshelf.domain.sessions.exceptions import SessionNotFoundError
from bookshelf.infrastructure.observability import SESSION_REJECTIONS
from bookshelf.shared.errors.base import AppError, InternalError, UnauthenticatedError
from bookshelf.shared.logging import logger


class AuthGate:
    def __init__(
        self,
        *,
        sessions: SessionManager,
        cookie_name: str,
        login_path: str,
        exempt_methods: Iterable[str] = ("OPTIONS",),
    ) -> None:
        self._sessions = sessions
        self._cookie_name = cookie_name
        self._login_path = login_path
        self._exempt_methods = frozenset(m.upper() for m in exempt_methods)

    def is_exempt(self, method: str, path: str) -> bool:
        return method.upper() in self._exempt_methods or path == self._login_path

    def authenticate(self, token: str | None) -> SessionContext:
        if not token:
            SESSION_REJECTIONS.labels(reason="missing").inc()
            raise UnauthenticatedError()

        try:
            context = self._sessions.resolve(token)
        except SessionNotFoundError:
            logger.info("auth_gate: unknown session")
            SESSION_REJECTIONS.labels(reason="unknown").inc()
            raise UnauthenticatedError() from None
        except AppError as exc:
            raise InternalError("get session data error") from exc

        if not context.is_valid:
            logger.info(f"auth_gate: expired session user={context.user_id}")
            SESSION_REJECTIONS.labels(reason="expired").inc()
            raise UnauthenticatedError()

        try:
            self._sessions.prolong(token)
        except SessionNotFoundError:
            # Swept between lookup and prolong.
            logger.info(f"auth_gate: session vanished user={context.user_id}")
            SESSION_REJECTIONS.labels(reason="vanished").inc()
            raise UnauthenticatedError() from None
        except AppError as exc:
            raise InternalError("prolong session error") from exc

        return context

    def install(self, app: Flask) -> None:
        @app.before_request
        def _authenticate_request() -> None:
            if self.is_exempt(request.method, request.path):
                return None
            context = self.authenticate(request.cookies.get(self._cookie_name))
            g.session_context = context
            g.user_id = context.user_id
            return None


def current_session() -> SessionContext | None:
    """Session context attached by :class:`AuthGate`, if any."""

    return getattr(g, "session_context", None)


__all__ = ["AuthGate", "current_session"]
