# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""HTTP controller for a user's book list."""

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from bookshelf.application.use_cases.books import (
    AddBookUseCase,
    DeleteBookUseCase,
    GetBookUseCase,
    ListBooksUseCase,
    UpdateBookUseCase,
)
from bookshelf.domain.books.entities import BookData
from bookshelf.interfaces.http.auth_gate import current_session
from bookshelf.interfaces.http.dto.books import BookDTO, BookPayloadDTO
from bookshelf.shared.errors.base import InternalError
from bookshelf.shared.errors.validation import raise_validation_error


def _session_user_id() -> int:
    context = current_session()
    if context is None or not context.user_id:
        raise InternalError("userId is required")
    return context.user_id


def _payload() -> BookData:
    try:
        dto = BookPayloadDTO.model_validate(request.get_json(silent=True) or {})
    except ValidationError as exc:
        raise_validation_error(exc)
    return dto.to_domain()


class BooksController:
    def __init__(
        self,
        *,
        list_books: ListBooksUseCase,
        get_book: GetBookUseCase,
        add_book: AddBookUseCase,
        update_book: UpdateBookUseCase,
        delete_book: DeleteBookUseCase,
    ) -> None:
        self._list_books = list_books
        self._get_book = get_book
        self._add_book = add_book
        self._update_book = update_book
        self._delete_book = delete_book

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("books", __name__, url_prefix="/users")
        bp.add_url_rule(
            "/<int:user_id>/books", view_func=self.list_books, methods=["GET"]
        )
        bp.add_url_rule(
            "/<int:user_id>/books/<int:book_id>", view_func=self.get_book, methods=["GET"]
        )
        bp.add_url_rule("/<int:user_id>/books", view_func=self.create, methods=["POST"])
        bp.add_url_rule(
            "/<int:user_id>/books/<int:book_id>", view_func=self.update, methods=["PUT"]
        )
        bp.add_url_rule(
            "/<int:user_id>/books/<int:book_id>", view_func=self.delete, methods=["DELETE"]
        )
        return bp

    def list_books(self, user_id: int) -> tuple[Response, int]:
        books = self._list_books.execute(user_id)
        items = [BookDTO.from_book(book).model_dump(by_alias=True, mode="json") for book in books]
        return jsonify(items), 200

    def get_book(self, user_id: int, book_id: int) -> tuple[Response, int]:
        book = self._get_book.execute(user_id, book_id)
        return jsonify(BookDTO.from_book(book).model_dump(by_alias=True, mode="json")), 200

    def create(self, user_id: int) -> tuple[Response, int]:
        session_user_id = _session_user_id()
        book = self._add_book.execute(session_user_id, user_id, _payload())
        return jsonify({"bookId": book.id}), 201

    def update(self, user_id: int, book_id: int) -> tuple[Response, int]:
        session_user_id = _session_user_id()
        self._update_book.execute(session_user_id, user_id, book_id, _payload())
        return jsonify({"ok": True}), 200

    def delete(self, user_id: int, book_id: int) -> tuple[Response, int]:
        session_user_id = _session_user_id()
        self._delete_book.execute(session_user_id, user_id, book_id)
        return jsonify({"ok": True}), 200
