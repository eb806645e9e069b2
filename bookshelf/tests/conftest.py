from __future__ import annotations

from dataclasses import replace

import pytest

from bookshelf.application.services.credential_verifier import CredentialVerifier
from bookshelf.application.services.session_manager import SessionManager
from bookshelf.domain.sessions.entities import SessionRecord
from bookshelf.domain.sessions.exceptions import SessionNotFoundError
from bookshelf.domain.sessions.repositories import SessionStore
from bookshelf.domain.users.entities import User
from bookshelf.domain.users.repositories import PasswordHasher, UserRepository

LIFETIME_MS = 1000 * 3600 * 24
START_MS = 1_700_000_000_000


class FakeClock:
    def __init__(self, now: int = START_MS) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> int:
        self.now += ms
        return self.now


class InMemorySessionStore(SessionStore):
    def __init__(self) -> None:
        self.rows: dict[str, SessionRecord] = {}

    def get(self, session_id: str) -> SessionRecord:
        try:
            return self.rows[session_id]
        except KeyError:
            raise SessionNotFoundError() from None

    def insert(self, record: SessionRecord) -> None:
        self.rows[record.session_id] = record

    def update_expiry(self, session_id: str, session_end: int) -> bool:
        record = self.rows.get(session_id)
        if record is None:
            return False
        self.rows[session_id] = replace(record, session_end=session_end)
        return True

    def delete_expired_before(self, timestamp: int) -> int:
        expired = [sid for sid, row in self.rows.items() if row.session_end < timestamp]
        for sid in expired:
            del self.rows[sid]
        return len(expired)


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._seq = 1

    def find_by_login(self, login: str) -> User | None:
        return next((u for u in self._users.values() if u.login == login), None)

    def find_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def add(self, login: str, name: str | None, password_hash: str) -> User:
        user = User(id=self._seq, login=login, name=name, password_hash=password_hash)
        self._users[user.id] = user
        self._seq += 1
        return user

    def remove(self, user_id: int) -> None:
        self._users.pop(user_id, None)


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


class SequentialTokens:
    def __init__(self) -> None:
        self._n = 0

    def __call__(self) -> str:
        self._n += 1
        return f"token-{self._n}"


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture()
def users() -> InMemoryUserRepository:
    repo = InMemoryUserRepository()
    repo.add("alice", "Alice", "hashed:secret")
    return repo


@pytest.fixture()
def alice(users: InMemoryUserRepository) -> User:
    user = users.find_by_login("alice")
    assert user is not None
    return user


@pytest.fixture()
def manager(
    store: InMemorySessionStore, users: InMemoryUserRepository, clock: FakeClock
) -> SessionManager:
    return SessionManager(
        store=store,
        users=users,
        lifetime_ms=LIFETIME_MS,
        clock=clock,
        token_factory=SequentialTokens(),
    )


@pytest.fixture()
def verifier(users: InMemoryUserRepository) -> CredentialVerifier:
    return CredentialVerifier(users=users, password_hasher=DeterministicHasher())
