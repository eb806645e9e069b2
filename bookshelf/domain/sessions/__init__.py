# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import SessionContext, SessionRecord, is_session_valid
from .exceptions import SessionNotFoundError
from .repositories import SessionStore

__all__ = [
    "SessionContext",
    "SessionNotFoundError",
    "SessionRecord",
    "SessionStore",
    "is_session_valid",
]
