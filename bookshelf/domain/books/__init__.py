# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Book, BookData
from .exceptions import BookNotFoundError
from .repositories import BookRepository

__all__ = ["Book", "BookData", "BookNotFoundError", "BookRepository"]
