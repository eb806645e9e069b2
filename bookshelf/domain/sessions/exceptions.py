# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from bookshelf.shared.errors.base import NotFoundError


class SessionNotFoundError(NotFoundError):
    default_message = "session not found"
