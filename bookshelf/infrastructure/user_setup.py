# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from bookshelf.domain.users.entities import User
from bookshelf.domain.users.repositories import PasswordHasher, UserRepository
from bookshelf.shared.config import AppConfig
from bookshelf.shared.errors.base import InvalidInputError, MissingInputError
from bookshelf.shared.logging import logger


class UserSetup:
    def __init__(self, *, users: UserRepository, password_hasher: PasswordHasher) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def create_user(self, login: str, password: str, name: str | None = None) -> User:
        if not login:
            raise MissingInputError("login is required", context={"field": "login"})
        if not password:
            raise MissingInputError("password is required", context={"field": "password"})
        if self._users.find_by_login(login) is not None:
            raise InvalidInputError("login already exists", context={"login": login})

        user = self._users.add(login, name, self._password_hasher.hash(password))
        logger.info(f"user_setup: created user id={user.id} login={login}")
        return user

    def ensure_seed_user(self, config: AppConfig) -> User | None:
        if not config.seed_user_login:
            logger.debug("user_setup: no SEED_USER_LOGIN configured, skipping")
            return None

        existing = self._users.find_by_login(config.seed_user_login)
        if existing is not None:
            logger.info(f"user_setup: seed user '{config.seed_user_login}' already present")
            return existing

        if not config.seed_user_password:
            raise MissingInputError(
                "SEED_USER_PASSWORD is required when SEED_USER_LOGIN is set",
                context={"field": "SEED_USER_PASSWORD"},
            )
        return self.create_user(
            config.seed_user_login, config.seed_user_password, config.seed_user_name
        )


__all__ = ["UserSetup"]
