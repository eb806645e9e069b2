# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class BookData:
    """Editable part of a book entry."""

    title_rus: str
    author_name_rus: str
    publication_year: int
    title_orig: str | None = None
    author_name_orig: str | None = None
    cover_image_link: str | None = None
    annotation: str | None = None
    read_status: str | None = None
    assessment: int | None = None
    comment: str | None = None

    def has_reading_status(self) -> bool:
        return any(
            value is not None for value in (self.read_status, self.assessment, self.comment)
        )


@dataclass(slots=True, frozen=True)
class Book:
    id: int
    user_id: int
    data: BookData
    inserted_at: datetime
    updated_at: datetime
