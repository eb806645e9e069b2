from __future__ import annotations

import pytest
from flask import Flask, g, jsonify

from bookshelf.application.services.session_manager import SessionManager
from bookshelf.domain.sessions.entities import SessionRecord
from bookshelf.interfaces.http.auth_gate import AuthGate, current_session
from bookshelf.shared.errors import register_error_handler
from bookshelf.shared.errors.base import (
    InfrastructureError,
    InternalError,
    UnauthenticatedError,
)

from .conftest import LIFETIME_MS, START_MS


class VanishingStore:
    """Session row disappears between lookup and prolong."""

    def __init__(self, inner) -> None:
        self._inner = inner

    def __getattr__(self, name):
        return getattr(self._inner, name)

    def update_expiry(self, session_id: str, session_end: int) -> bool:
        self._inner.rows.pop(session_id, None)
        return False


class BrokenStore:
    def __init__(self, inner, *, fail_on: str) -> None:
        self._inner = inner
        self._fail_on = fail_on

    def __getattr__(self, name):
        if name == self._fail_on:
            def _fail(*args, **kwargs):
                raise InfrastructureError()

            return _fail
        return getattr(self._inner, name)


@pytest.fixture()
def gate(manager) -> AuthGate:
    return AuthGate(sessions=manager, cookie_name="sessionId", login_path="/auth/login")


def test_exempt_paths_and_methods(gate):
    assert gate.is_exempt("POST", "/auth/login")
    assert gate.is_exempt("options", "/users/1/books")
    assert not gate.is_exempt("GET", "/users/1/books")
    assert not gate.is_exempt("POST", "/auth/logout")


@pytest.mark.parametrize("token", [None, ""])
def test_missing_token(gate, token):
    with pytest.raises(UnauthenticatedError):
        gate.authenticate(token)


def test_unknown_token(gate):
    with pytest.raises(UnauthenticatedError):
        gate.authenticate("nope")


def test_expired_session_is_not_prolonged(gate, manager, store, clock, alice):
    sid = manager.create(alice.id, alice.login)
    clock.advance(LIFETIME_MS)

    with pytest.raises(UnauthenticatedError):
        gate.authenticate(sid)

    assert store.rows[sid].session_end == START_MS + LIFETIME_MS


def test_valid_session_is_prolonged(gate, manager, store, clock, alice):
    sid = manager.create(alice.id, alice.login)
    clock.advance(60_000)

    context = gate.authenticate(sid)

    assert context.user_id == alice.id
    assert context.is_valid
    assert store.rows[sid].session_end == clock.now + LIFETIME_MS


def test_session_vanishing_before_prolong_is_unauthenticated(manager, store, users, clock, alice):
    sid = manager.create(alice.id, alice.login)
    racing = SessionManager(
        store=VanishingStore(store), users=users, lifetime_ms=LIFETIME_MS, clock=clock
    )
    gate = AuthGate(sessions=racing, cookie_name="sessionId", login_path="/auth/login")

    with pytest.raises(UnauthenticatedError):
        gate.authenticate(sid)


@pytest.mark.parametrize(
    ("fail_on", "message"),
    [("get", "get session data error"), ("update_expiry", "prolong session error")],
)
def test_store_failure_is_internal(
    manager, store, users, clock, alice, fail_on, message
):
    sid = manager.create(alice.id, alice.login)
    broken = SessionManager(
        store=BrokenStore(store, fail_on=fail_on),
        users=users,
        lifetime_ms=LIFETIME_MS,
        clock=clock,
    )
    gate = AuthGate(sessions=broken, cookie_name="sessionId", login_path="/auth/login")

    with pytest.raises(InternalError) as exc_info:
        gate.authenticate(sid)

    assert exc_info.value.message == message
    assert exc_info.value.status == 500


@pytest.fixture()
def client(gate):
    app = Flask(__name__)
    register_error_handler(app)
    gate.install(app)

    @app.post("/auth/login")
    def login():
        return jsonify({"context": current_session() is not None})

    @app.get("/private")
    def private():
        return jsonify({"userId": g.user_id})

    return app.test_client()


def test_installed_gate_rejects_without_cookie(client):
    resp = client.get("/private")

    assert resp.status_code == 401
    assert resp.get_json()["error"] == "unauthenticated"


def test_installed_gate_lets_login_and_preflight_through(client):
    assert client.post("/auth/login").get_json() == {"context": False}
    assert client.options("/private").status_code == 200


def test_installed_gate_attaches_context(client, manager, alice):
    sid = manager.create(alice.id, alice.login)
    client.set_cookie("sessionId", sid)

    resp = client.get("/private")

    assert resp.status_code == 200
    assert resp.get_json() == {"userId": alice.id}


def test_record_is_plain_data():
    record = SessionRecord("sid", 1, START_MS, START_MS + 1)

    assert record.is_valid_at(START_MS)
    assert not record.is_valid_at(START_MS + 1)
