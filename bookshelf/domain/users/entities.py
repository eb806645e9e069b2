# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class Identity:
    """Authenticated user as seen past the credential check."""

    id: int
    login: str
    name: str | None


@dataclass(slots=True, frozen=True)
class User:
    id: int
    login: str
    name: str | None
    password_hash: str

    def identity(self) -> Identity:
        return Identity(id=self.id, login=self.login, name=self.name)
