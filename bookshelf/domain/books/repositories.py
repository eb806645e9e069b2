# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import Book, BookData


class BookRepository(Protocol):
    def list_for_user(self, user_id: int) -> Sequence[Book]: ...
    def get_for_user(self, user_id: int, book_id: int) -> Book | None: ...
    def add(self, user_id: int, data: BookData) -> Book: ...
    def update(self, user_id: int, book_id: int, data: BookData) -> bool: ...
    def delete(self, user_id: int, book_id: int) -> bool: ...
