# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence

from bookshelf.domain.books.entities import Book
from bookshelf.domain.books.exceptions import BookNotFoundError
from bookshelf.domain.books.repositories import BookRepository


class ListBooksUseCase:
    def __init__(self, *, books: BookRepository) -> None:
        self._books = books

    def execute(self, user_id: int) -> Sequence[Book]:
        return self._books.list_for_user(user_id)


class GetBookUseCase:
    def __init__(self, *, books: BookRepository) -> None:
        self._books = books

    def execute(self, user_id: int, book_id: int) -> Book:
        book = self._books.get_for_user(user_id, book_id)
        if book is None:
            raise BookNotFoundError(book_id)
        return book
