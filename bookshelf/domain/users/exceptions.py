# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from bookshelf.shared.errors.base import InvalidCredentialError, NotFoundError


class UserNotFoundError(NotFoundError):
    default_message = "user not found"


class IncorrectPasswordError(InvalidCredentialError):
    default_message = "incorrect password"
