from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from flask import Flask

from bookshelf.application.use_cases.auth import LoginResult
from bookshelf.domain.users.entities import Identity
from bookshelf.domain.users.exceptions import IncorrectPasswordError
from bookshelf.interfaces.http.controllers.auth_controller import AuthController
from bookshelf.shared.config import SessionConfig
from bookshelf.shared.errors import register_error_handler
from bookshelf.shared.errors.base import InternalError


@pytest.fixture()
def use_cases():
    login = MagicMock()
    login.execute.return_value = LoginResult(
        identity=Identity(id=7, login="alice", name="Alice"), session_id="sid-7"
    )
    logout = MagicMock()
    return login, logout


@pytest.fixture()
def client(use_cases):
    login, logout = use_cases
    controller = AuthController(
        login_use_case=login,
        logout_use_case=logout,
        session_config=SessionConfig(SESSION_COOKIE_NAME="sid", COOKIE_SECURE=True),
    )
    flask_app = Flask(__name__)
    register_error_handler(flask_app)
    flask_app.register_blueprint(controller.as_blueprint())
    return flask_app.test_client()


def test_login_passes_credentials_and_sets_cookie(client, use_cases):
    login, _ = use_cases

    resp = client.post("/auth/login", json={"login": "alice", "password": "secret"})

    assert resp.status_code == 200
    assert resp.get_json() == {"id": 7, "login": "alice", "name": "Alice"}
    login.execute.assert_called_once_with("alice", "secret")
    cookie_header = resp.headers["Set-Cookie"]
    assert cookie_header.startswith("sid=sid-7")
    assert "Secure" in cookie_header
    assert "HttpOnly" in cookie_header


def test_login_error_maps_to_status(client, use_cases):
    login, _ = use_cases
    login.execute.side_effect = IncorrectPasswordError()

    resp = client.post("/auth/login", json={"login": "alice", "password": "nope"})

    assert resp.status_code == 401
    assert resp.get_json() == {"error": "invalid_credential", "message": "incorrect password"}
    assert "Set-Cookie" not in resp.headers


def test_login_rejects_oversized_fields(client, use_cases):
    login, _ = use_cases

    resp = client.post("/auth/login", json={"login": "a" * 65, "password": "secret"})

    assert resp.status_code == 422
    login.execute.assert_not_called()


def test_session_endpoint_without_gate_context(client):
    assert client.get("/auth/session").status_code == 401


def test_logout_without_gate_context_is_internal(client, use_cases):
    _, logout = use_cases
    logout.execute.side_effect = InternalError("sessionId is required")

    resp = client.post("/auth/logout")

    assert resp.status_code == 500
    logout.execute.assert_called_once_with(None)
