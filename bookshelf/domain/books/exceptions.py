# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from bookshelf.shared.errors.base import NotFoundError


class BookNotFoundError(NotFoundError):
    default_message = "book not found"

    def __init__(self, book_id: int) -> None:
        super().__init__(context={"book_id": book_id})
