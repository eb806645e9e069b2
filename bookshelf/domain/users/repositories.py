# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import User


class UserRepository(Protocol):
    def find_by_login(self, login: str) -> User | None: ...
    def find_by_id(self, user_id: int) -> User | None: ...
    def add(self, login: str, name: str | None, password_hash: str) -> User: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
