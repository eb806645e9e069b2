"""Use-case for closing the current session."""

from __future__ import annotations

from bookshelf.application.services.session_manager import SessionManager
from bookshelf.domain.sessions.entities import SessionContext
from bookshelf.domain.sessions.exceptions import SessionNotFoundError
from bookshelf.shared.errors.base import InternalError
from bookshelf.shared.logging import logger


class LogoutUserUseCase:
    def __init__(self, *, sessions: SessionManager) -> None:
        self._sessions = sessions

    def execute(self, context: SessionContext | None) -> None:
        if context is None or not context.session_id:
            raise InternalError("sessionId is required")
        try:
            self._sessions.close(context.session_id)
        except SessionNotFoundError:
            # Swept after the request was authenticated; nothing left to close.
            logger.info(f"auth.logout: session already gone user={context.user_id}")
