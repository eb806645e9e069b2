# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import SessionRecord


class SessionStore(Protocol):
    """Keyed storage of session rows.

    ``get`` raises :class:`SessionNotFoundError` for a missing key and never
    returns a placeholder record. ``update_expiry`` reports whether a row was
    touched so callers can surface zero-row updates.
    """

    def get(self, session_id: str) -> SessionRecord: ...
    def insert(self, record: SessionRecord) -> None: ...
    def update_expiry(self, session_id: str, session_end: int) -> bool: ...
    def delete_expired_before(self, timestamp: int) -> int: ...
