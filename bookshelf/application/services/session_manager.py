# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Lifecycle of login sessions: create, resolve, prolong, close and sweep.

Sessions use sliding expiration. ``session_end`` is pushed to
``now + lifetime`` on every authenticated request, and rows whose end has
passed stay in the store until the next sweep removes them.
"""

from __future__ import annotations

import secrets
from collections.abc import Callable

from bookshelf.domain.sessions.entities import SessionContext, SessionRecord
from bookshelf.domain.sessions.exceptions import SessionNotFoundError
from bookshelf.domain.sessions.repositories import SessionStore
from bookshelf.domain.users.repositories import UserRepository
from bookshelf.shared.config import SESSION_LIFETIME_MS
from bookshelf.shared.errors.base import InvalidInputError, MissingInputError
from bookshelf.shared.logging import logger
from bookshelf.shared.utils.clock import Clock, current_millis

TokenFactory = Callable[[], str]


def generate_session_token() -> str:
    return secrets.token_urlsafe(32)


def _short(session_id: str) -> str:
    return f"{session_id[:8]}…"


class SessionManager:
    def __init__(
        self,
        *,
        store: SessionStore,
        users: UserRepository,
        lifetime_ms: int = SESSION_LIFETIME_MS,
        clock: Clock = current_millis,
        token_factory: TokenFactory = generate_session_token,
    ) -> None:
        if lifetime_ms <= 0:
            raise ValueError("session lifetime must be positive")
        self._store = store
        self._users = users
        self._lifetime_ms = lifetime_ms
        self._clock = clock
        self._token_factory = token_factory

    @property
    def lifetime_ms(self) -> int:
        return self._lifetime_ms

    def create(self, user_id: int, user_login: str) -> str:
        if not user_login:
            raise InvalidInputError("user login is required", context={"field": "user_login"})

        session_id = self._token_factory()
        if not session_id:
            raise InvalidInputError("session token generator returned an empty value")

        now = self._clock()
        record = SessionRecord(
            session_id=session_id,
            user_id=user_id,
            session_start=now,
            session_end=now + self._lifetime_ms,
        )
        self._store.insert(record)
        logger.info(
            f"session.create: user={user_id} sid={_short(session_id)} end={record.session_end}"
        )
        return session_id

    def resolve(self, session_id: str) -> SessionContext:
        _require_session_id(session_id)
        record = self._store.get(session_id)
        user = self._users.find_by_id(record.user_id)
        if user is None:
            logger.warning(
                f"session.resolve: owner user={record.user_id} missing for sid={_short(session_id)}"
            )
            raise SessionNotFoundError(context={"reason": "user_missing"})
        return SessionContext.resolve(record, user, self._clock())

    def prolong(self, session_id: str) -> None:
        # Validity is checked by the caller; an expired row is extended too.
        _require_session_id(session_id)
        new_end = self._clock() + self._lifetime_ms
        if not self._store.update_expiry(session_id, new_end):
            raise SessionNotFoundError()
        logger.debug(f"session.prolong: sid={_short(session_id)} end={new_end}")

    def close(self, session_id: str) -> None:
        _require_session_id(session_id)
        now = self._clock()
        if not self._store.update_expiry(session_id, now):
            raise SessionNotFoundError()
        logger.info(f"session.close: sid={_short(session_id)}")

    def sweep_expired(self) -> int:
        removed = self._store.delete_expired_before(self._clock())
        if removed:
            logger.info(f"session.sweep: removed={removed}")
        return removed


def _require_session_id(session_id: str) -> None:
    if not session_id:
        raise MissingInputError("sessionId is required", context={"field": "session_id"})
