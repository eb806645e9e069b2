# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy.orm import Session

from bookshelf.domain.users.entities import User as DomainUser
from bookshelf.domain.users.repositories import UserRepository
from bookshelf.infrastructure.db.models import User
from bookshelf.infrastructure.db.session import Database


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        login=row.login,
        name=row.name,
        password_hash=row.password_hash,
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, db: Database) -> None:
        self._db = db

    def find_by_login(self, login: str) -> DomainUser | None:
        def _find(session: Session) -> DomainUser | None:
            row = session.query(User).filter(User.login == login).first()
            return _to_domain(row) if row else None

        return self._db.run(_find)

    def find_by_id(self, user_id: int) -> DomainUser | None:
        # Hit on every authenticated request by the session check.
        def _find(session: Session) -> DomainUser | None:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

        return self._db.run(_find)

    def add(self, login: str, name: str | None, password_hash: str) -> DomainUser:
        def _add(session: Session) -> DomainUser:
            row = User(login=login, name=name, password_hash=password_hash)
            session.add(row)
            session.flush()
            return _to_domain(row)

        return self._db.run(_add)
