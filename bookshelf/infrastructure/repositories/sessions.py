# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy import delete, update
from sqlalchemy.orm import Session

from bookshelf.domain.sessions.entities import SessionRecord
from bookshelf.domain.sessions.exceptions import SessionNotFoundError
from bookshelf.domain.sessions.repositories import SessionStore
from bookshelf.infrastructure.db.models import UserSession
from bookshelf.infrastructure.db.session import Database


class SqlAlchemySessionStore(SessionStore):
    """Session rows in ``user_sessions``. Every call is one short transaction."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def get(self, session_id: str) -> SessionRecord:
        def _get(session: Session) -> SessionRecord | None:
            row = session.get(UserSession, session_id)
            if row is None:
                return None
            return SessionRecord(
                session_id=row.session_id,
                user_id=row.user_id,
                session_start=row.session_start,
                session_end=row.session_end,
            )

        record = self._db.run(_get)
        if record is None:
            raise SessionNotFoundError()
        return record

    def insert(self, record: SessionRecord) -> None:
        def _insert(session: Session) -> None:
            session.add(
                UserSession(
                    session_id=record.session_id,
                    user_id=record.user_id,
                    session_start=record.session_start,
                    session_end=record.session_end,
                )
            )

        self._db.run(_insert)

    def update_expiry(self, session_id: str, session_end: int) -> bool:
        def _update(session: Session) -> bool:
            result = session.execute(
                update(UserSession)
                .where(UserSession.session_id == session_id)
                .values(session_end=session_end)
                .execution_options(synchronize_session=False)
            )
            return result.rowcount > 0

        return self._db.run(_update)

    def delete_expired_before(self, timestamp: int) -> int:
        def _delete(session: Session) -> int:
            result = session.execute(
                delete(UserSession)
                .where(UserSession.session_end < timestamp)
                .execution_options(synchronize_session=False)
            )
            return int(result.rowcount or 0)

        return self._db.run(_delete)
