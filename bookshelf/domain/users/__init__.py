# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Identity, User
from .exceptions import IncorrectPasswordError, UserNotFoundError
from .repositories import PasswordHasher, UserRepository

__all__ = [
    "Identity",
    "IncorrectPasswordError",
    "PasswordHasher",
    "User",
    "UserNotFoundError",
    "UserRepository",
]
