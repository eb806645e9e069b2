# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import secrets

from bookshelf.domain.users.entities import Identity
from bookshelf.domain.users.exceptions import IncorrectPasswordError, UserNotFoundError
from bookshelf.domain.users.repositories import PasswordHasher, UserRepository
from bookshelf.shared.errors.base import InvalidCredentialError, MissingInputError
from bookshelf.shared.logging import logger


class CredentialVerifier:
    """Checks a login/password pair against the user table.

    With ``unify_errors`` an unknown login is reported the same way as a
    wrong password so the response does not reveal which accounts exist.
    """

    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
        unify_errors: bool = False,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._unify_errors = unify_errors
        # Unknown logins are checked against this so both failures cost one hash.
        self._dummy_hash = password_hasher.hash(secrets.token_urlsafe(16))

    def verify(self, login: str | None, password: str | None) -> Identity:
        if not login:
            raise MissingInputError("login is required", context={"field": "login"})
        if not password:
            raise MissingInputError("password is required", context={"field": "password"})

        user = self._users.find_by_login(login)
        if user is None:
            self._password_hasher.verify(password, self._dummy_hash)
            logger.info(f"credentials: unknown login digest={_digest(login)} len={len(login)}")
            if self._unify_errors:
                raise InvalidCredentialError("incorrect login or password")
            raise UserNotFoundError()

        if not self._password_hasher.verify(password, user.password_hash):
            logger.info(f"credentials: password mismatch user_id={user.id}")
            if self._unify_errors:
                raise InvalidCredentialError("incorrect login or password")
            raise IncorrectPasswordError()

        return user.identity()


def _digest(value: str) -> str:
    # Login input may hold a mistyped password.
    return hashlib.sha256(value.encode("utf-8")).hexdigest()[:8]
