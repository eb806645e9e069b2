from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from bookshelf.domain.books.entities import Book, BookData


class BookPayloadDTO(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, validate_by_name=True)

    title_rus: str = Field(min_length=1, max_length=256)
    author_name_rus: str = Field(min_length=1, max_length=256)
    publication_year: int = Field(ge=0, le=9999)
    title_orig: str | None = Field(None, max_length=256)
    author_name_orig: str | None = Field(None, max_length=256)
    cover_image_link: str | None = Field(None, max_length=512)
    annotation: str | None = None
    read_status: str | None = Field(None, max_length=32)
    assessment: int | None = Field(None, ge=0, le=10)
    comment: str | None = None

    @field_validator("title_rus", "author_name_rus")
    @classmethod
    def _strip_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    def to_domain(self) -> BookData:
        return BookData(**self.model_dump())


class BookDTO(BookPayloadDTO):
    id: int
    inserted_at: datetime
    updated_at: datetime

    @classmethod
    def from_book(cls, book: Book) -> BookDTO:
        return cls(
            id=book.id,
            inserted_at=book.inserted_at,
            updated_at=book.updated_at,
            title_rus=book.data.title_rus,
            author_name_rus=book.data.author_name_rus,
            publication_year=book.data.publication_year,
            title_orig=book.data.title_orig,
            author_name_orig=book.data.author_name_orig,
            cover_image_link=book.data.cover_image_link,
            annotation=book.data.annotation,
            read_status=book.data.read_status,
            assessment=book.data.assessment,
            comment=book.data.comment,
        )
