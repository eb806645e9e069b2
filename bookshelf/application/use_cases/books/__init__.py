from .commands import AddBookUseCase, DeleteBookUseCase, UpdateBookUseCase, ensure_owner
from .queries import GetBookUseCase, ListBooksUseCase

__all__ = [
    "AddBookUseCase",
    "DeleteBookUseCase",
    "GetBookUseCase",
    "ListBooksUseCase",
    "UpdateBookUseCase",
    "ensure_owner",
]
