# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from bookshelf.application.services.credential_verifier import CredentialVerifier
from bookshelf.application.services.session_manager import SessionManager
from bookshelf.domain.users.entities import Identity
from bookshelf.shared.errors.base import AppError
from bookshelf.shared.logging import logger


@dataclass(slots=True, frozen=True)
class LoginResult:
    identity: Identity
    session_id: str


class LoginUserUseCase:
    def __init__(
        self,
        *,
        verifier: CredentialVerifier,
        sessions: SessionManager,
    ) -> None:
        self._verifier = verifier
        self._sessions = sessions

    def execute(self, login: str | None, password: str | None) -> LoginResult:
        identity = self._verifier.verify(login, password)
        session_id = self._sessions.create(identity.id, identity.login)

        # Expired rows are reaped lazily, piggybacking on logins.
        try:
            self._sessions.sweep_expired()
        except AppError as exc:
            logger.warning(f"auth.login: expired session sweep failed ({exc.code}: {exc.message})")

        return LoginResult(identity=identity, session_id=session_id)
