# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Book changes. Only the session user may modify their own list."""

from __future__ import annotations

from dataclasses import replace

from bookshelf.domain.books.entities import Book, BookData
from bookshelf.domain.books.exceptions import BookNotFoundError
from bookshelf.domain.books.repositories import BookRepository
from bookshelf.shared.errors.base import ForbiddenError
from bookshelf.shared.logging import logger


def ensure_owner(session_user_id: int, user_id: int) -> None:
    if session_user_id != user_id:
        logger.warning(f"books: user={session_user_id} tried to modify list of user={user_id}")
        raise ForbiddenError(context={"user_id": user_id})


class AddBookUseCase:
    def __init__(self, *, books: BookRepository) -> None:
        self._books = books

    def execute(self, session_user_id: int, user_id: int, data: BookData) -> Book:
        ensure_owner(session_user_id, user_id)
        book = self._books.add(user_id, data)
        logger.info(f"books.add: ok user={user_id} book={book.id}")
        return book


class UpdateBookUseCase:
    def __init__(self, *, books: BookRepository) -> None:
        self._books = books

    def execute(
        self, session_user_id: int, user_id: int, book_id: int, data: BookData
    ) -> None:
        ensure_owner(session_user_id, user_id)
        current = self._books.get_for_user(user_id, book_id)
        if current is None:
            raise BookNotFoundError(book_id)

        # Reading status is only replaced when the payload carries some of it.
        if not data.has_reading_status():
            data = replace(
                data,
                read_status=current.data.read_status,
                assessment=current.data.assessment,
                comment=current.data.comment,
            )
        if not self._books.update(user_id, book_id, data):
            raise BookNotFoundError(book_id)
        logger.info(f"books.update: ok user={user_id} book={book_id}")


class DeleteBookUseCase:
    def __init__(self, *, books: BookRepository) -> None:
        self._books = books

    def execute(self, session_user_id: int, user_id: int, book_id: int) -> None:
        ensure_owner(session_user_id, user_id)
        if not self._books.delete(user_id, book_id):
            raise BookNotFoundError(book_id)
        logger.info(f"books.delete: ok user={user_id} book={book_id}")
