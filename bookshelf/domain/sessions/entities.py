# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Session records and the request-scoped context derived from them."""

from __future__ import annotations

from dataclasses import dataclass

from bookshelf.domain.users.entities import User


def is_session_valid(session_end: int | None, now: int) -> bool:
    """A session is valid strictly before its end timestamp."""

    return session_end is not None and now < session_end


@dataclass(slots=True, frozen=True)
class SessionRecord:
    """Stored session row. Timestamps are epoch milliseconds."""

    session_id: str
    user_id: int
    session_start: int
    session_end: int

    def is_valid_at(self, now: int) -> bool:
        return is_session_valid(self.session_end, now)


@dataclass(slots=True, frozen=True)
class SessionContext:
    """Identity and session metadata resolved for a single request.

    Built on every lookup; ``is_valid`` reflects the instant of the lookup
    and is never persisted.
    """

    user_id: int
    user_login: str
    user_name: str | None
    session_id: str
    session_start: int
    session_end: int
    is_valid: bool

    @classmethod
    def resolve(cls, record: SessionRecord, user: User, now: int) -> SessionContext:
        return cls(
            user_id=record.user_id,
            user_login=user.login,
            user_name=user.name,
            session_id=record.session_id,
            session_start=record.session_start,
            session_end=record.session_end,
            is_valid=record.is_valid_at(now),
        )
