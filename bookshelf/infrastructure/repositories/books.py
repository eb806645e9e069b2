# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import fields

from sqlalchemy.orm import Session

from bookshelf.domain.books.entities import Book as DomainBook
from bookshelf.domain.books.entities import BookData
from bookshelf.domain.books.repositories import BookRepository
from bookshelf.infrastructure.db.models import Book
from bookshelf.infrastructure.db.session import Database

_DATA_FIELDS = tuple(field.name for field in fields(BookData))


def _to_domain(row: Book) -> DomainBook:
    return DomainBook(
        id=row.id,
        user_id=row.user_id,
        data=BookData(**{name: getattr(row, name) for name in _DATA_FIELDS}),
        inserted_at=row.inserted_at,
        updated_at=row.updated_at,
    )


def _find(session: Session, user_id: int, book_id: int) -> Book | None:
    return (
        session.query(Book)
        .filter(Book.id == book_id, Book.user_id == user_id)
        .first()
    )


def _apply(row: Book, data: BookData) -> None:
    for name in _DATA_FIELDS:
        setattr(row, name, getattr(data, name))


class SqlAlchemyBookRepository(BookRepository):
    def __init__(self, db: Database) -> None:
        self._db = db

    def list_for_user(self, user_id: int) -> Sequence[DomainBook]:
        def _list(session: Session) -> list[DomainBook]:
            rows = (
                session.query(Book)
                .filter(Book.user_id == user_id)
                .order_by(Book.id.asc())
                .all()
            )
            return [_to_domain(row) for row in rows]

        return self._db.run(_list)

    def get_for_user(self, user_id: int, book_id: int) -> DomainBook | None:
        def _get(session: Session) -> DomainBook | None:
            row = _find(session, user_id, book_id)
            return _to_domain(row) if row else None

        return self._db.run(_get)

    def add(self, user_id: int, data: BookData) -> DomainBook:
        def _add(session: Session) -> DomainBook:
            row = Book(user_id=user_id)
            _apply(row, data)
            session.add(row)
            session.flush()
            session.refresh(row)
            return _to_domain(row)

        return self._db.run(_add)

    def update(self, user_id: int, book_id: int, data: BookData) -> bool:
        def _update(session: Session) -> bool:
            row = _find(session, user_id, book_id)
            if row is None:
                return False
            _apply(row, data)
            return True

        return self._db.run(_update)

    def delete(self, user_id: int, book_id: int) -> bool:
        def _delete(session: Session) -> bool:
            row = _find(session, user_id, book_id)
            if row is None:
                return False
            session.delete(row)
            return True

        return self._db.run(_delete)
