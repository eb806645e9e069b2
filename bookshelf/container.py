"""Application dependency container."""

from __future__ import annotations

from functools import cached_property

from bookshelf.application.services.credential_verifier import CredentialVerifier
from bookshelf.application.services.password_hashing import build_password_hasher
from bookshelf.application.services.session_manager import SessionManager
from bookshelf.application.use_cases.auth import LoginUserUseCase, LogoutUserUseCase
from bookshelf.application.use_cases.books import (
    AddBookUseCase,
    DeleteBookUseCase,
    GetBookUseCase,
    ListBooksUseCase,
    UpdateBookUseCase,
)
from bookshelf.domain.users.repositories import PasswordHasher
from bookshelf.infrastructure.db import Database
from bookshelf.infrastructure.repositories import (
    SqlAlchemyBookRepository,
    SqlAlchemySessionStore,
    SqlAlchemyUserRepository,
)
from bookshelf.infrastructure.user_setup import UserSetup
from bookshelf.interfaces.http.auth_gate import AuthGate
from bookshelf.interfaces.http.controllers.auth_controller import AuthController
from bookshelf.interfaces.http.controllers.books_controller import BooksController
from bookshelf.shared.config import AppConfig
from bookshelf.shared.utils.clock import Clock, current_millis


class Container:
    def __init__(self, config: AppConfig, *, clock: Clock = current_millis) -> None:
        self.config = config
        self._clock = clock

    @cached_property
    def database(self) -> Database:
        return Database(self.config.database)

    @cached_property
    def password_hasher(self) -> PasswordHasher:
        return build_password_hasher(self.config.security.password_hash_scheme)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.database)

    @cached_property
    def session_store(self) -> SqlAlchemySessionStore:
        return SqlAlchemySessionStore(self.database)

    @cached_property
    def book_repository(self) -> SqlAlchemyBookRepository:
        return SqlAlchemyBookRepository(self.database)

    @cached_property
    def session_manager(self) -> SessionManager:
        return SessionManager(
            store=self.session_store,
            users=self.user_repository,
            lifetime_ms=self.config.session.lifetime_ms,
            clock=self._clock,
        )

    @cached_property
    def credential_verifier(self) -> CredentialVerifier:
        return CredentialVerifier(
            users=self.user_repository,
            password_hasher=self.password_hasher,
            unify_errors=self.config.security.unify_login_errors,
        )

    @cached_property
    def user_setup(self) -> UserSetup:
        return UserSetup(users=self.user_repository, password_hasher=self.password_hasher)

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(verifier=self.credential_verifier, sessions=self.session_manager)

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(sessions=self.session_manager)

    @cached_property
    def auth_gate(self) -> AuthGate:
        return AuthGate(
            sessions=self.session_manager,
            cookie_name=self.config.session.cookie_name,
            login_path=self.config.session.login_path,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
            session_config=self.config.session,
        )

    @cached_property
    def books_controller(self) -> BooksController:
        return BooksController(
            list_books=ListBooksUseCase(books=self.book_repository),
            get_book=GetBookUseCase(books=self.book_repository),
            add_book=AddBookUseCase(books=self.book_repository),
            update_book=UpdateBookUseCase(books=self.book_repository),
            delete_book=DeleteBookUseCase(books=self.book_repository),
        )
