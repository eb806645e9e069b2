# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from datetime import UTC, datetime

from sqlalchemy import BigInteger, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bookshelf.infrastructure.db.session import Base


class User(Base):
    __tablename__ = "users"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    login: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    name: Mapped[str | None] = mapped_column(String(128), nullable=True)
    password_hash: Mapped[str] = mapped_column(String(256))


class UserSession(Base):
    __tablename__ = "user_sessions"
    session_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    # Epoch milliseconds
    session_start: Mapped[int] = mapped_column(BigInteger, nullable=False)
    session_end: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)


class Book(Base):
    __tablename__ = "books"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    title_orig: Mapped[str | None] = mapped_column(String(256), nullable=True)
    title_rus: Mapped[str] = mapped_column(String(256))
    author_name_orig: Mapped[str | None] = mapped_column(String(256), nullable=True)
    author_name_rus: Mapped[str] = mapped_column(String(256))
    publication_year: Mapped[int] = mapped_column(Integer)
    cover_image_link: Mapped[str | None] = mapped_column(String(512), nullable=True)
    annotation: Mapped[str | None] = mapped_column(Text, nullable=True)
    read_status: Mapped[str | None] = mapped_column(String(32), nullable=True)
    assessment: Mapped[int | None] = mapped_column(Integer, nullable=True)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    inserted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )
