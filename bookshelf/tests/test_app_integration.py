from __future__ import annotations

import pytest

from bookshelf.app import create_app, get_container
from bookshelf.domain.sessions.exceptions import SessionNotFoundError
from bookshelf.shared.config import AppConfig, DatabaseConfig, SecurityConfig, SessionConfig
from bookshelf.shared.errors.base import AppError

from .conftest import LIFETIME_MS, START_MS

HOUR_MS = 3600 * 1000


def make_config(session: SessionConfig | None = None, **security) -> AppConfig:
    return AppConfig(
        APP_ENV="test",
        database=DatabaseConfig(DATABASE_URL="sqlite://"),
        session=session or SessionConfig(SESSION_LIFETIME_MS=LIFETIME_MS),
        security=SecurityConfig(ENABLE_CORS=False, **security),
    )


@pytest.fixture()
def app(clock):
    app = create_app(make_config(), clock=clock)
    container = get_container(app)
    container.user_setup.create_user("alice", "secret", "Alice")
    container.user_setup.create_user("bob", "hunter2", "Bob")
    yield app
    container.database.dispose()


@pytest.fixture()
def client(app):
    return app.test_client()


def login(client, login="alice", password="secret"):
    return client.post("/auth/login", json={"login": login, "password": password})


def test_login_sets_session_cookie(client):
    resp = login(client)

    assert resp.status_code == 200
    assert resp.get_json() == {"id": 1, "login": "alice", "name": "Alice"}

    cookie_header = resp.headers["Set-Cookie"]
    assert cookie_header.startswith("sessionId=")
    assert "HttpOnly" in cookie_header
    assert "Path=/" in cookie_header
    assert "Max-Age=86400" in cookie_header
    assert "SameSite=Lax" in cookie_header
    assert client.get_cookie("sessionId") is not None


def test_login_accepts_username_alias(client):
    resp = client.post("/auth/login", json={"username": "bob", "password": "hunter2"})

    assert resp.status_code == 200
    assert resp.get_json()["login"] == "bob"


@pytest.mark.parametrize(
    ("payload", "status", "code"),
    [
        ({"login": "alice", "password": "wrong"}, 401, "invalid_credential"),
        ({"login": "nobody", "password": "secret"}, 404, "not_found"),
        ({"login": "alice"}, 400, "missing_input"),
        ({}, 400, "missing_input"),
    ],
)
def test_login_failures(client, payload, status, code):
    resp = client.post("/auth/login", json=payload)

    assert resp.status_code == status
    assert resp.get_json()["error"] == code
    assert client.get_cookie("sessionId") is None


def test_unified_login_errors(clock):
    app = create_app(make_config(UNIFY_LOGIN_ERRORS=True), clock=clock)
    get_container(app).user_setup.create_user("alice", "secret", "Alice")
    client = app.test_client()

    unknown = login(client, "nobody", "secret")
    wrong = login(client, "alice", "wrong")

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.get_json() == wrong.get_json()


def test_requests_without_session_are_rejected(client):
    for method, path in [
        ("GET", "/auth/session"),
        ("POST", "/auth/logout"),
        ("GET", "/users/1/books"),
    ]:
        resp = client.open(path, method=method)
        assert resp.status_code == 401, path
        assert resp.get_json()["error"] == "unauthenticated"


def test_unknown_cookie_is_rejected(client):
    client.set_cookie("sessionId", "made-up")

    assert client.get("/auth/session").status_code == 401


def test_preflight_skips_session_check(client):
    assert client.options("/users/1/books").status_code == 200


def test_session_data_and_sliding_expiry(client, clock):
    login(client)

    first = client.get("/auth/session").get_json()
    assert first["userId"] == 1
    assert first["userLogin"] == "alice"
    assert first["userName"] == "Alice"
    assert first["sessionStart"] == START_MS
    assert first["sessionEnd"] == START_MS + LIFETIME_MS
    assert first["isValid"] is True
    assert first["sessionId"] == client.get_cookie("sessionId").value

    clock.advance(HOUR_MS)
    assert client.get("/users/1/books").status_code == 200

    second = client.get("/auth/session").get_json()
    assert second["sessionEnd"] == START_MS + HOUR_MS + LIFETIME_MS


def test_session_expires_after_idle_lifetime(client, clock):
    login(client)

    clock.advance(LIFETIME_MS - 1)
    assert client.get("/users/1/books").status_code == 200

    clock.advance(LIFETIME_MS)
    resp = client.get("/users/1/books")
    assert resp.status_code == 401


def test_logout_invalidates_token(client):
    login(client)
    sid = client.get_cookie("sessionId").value

    resp = client.post("/auth/logout")

    assert resp.status_code == 200
    assert resp.get_json() == {"ok": True}
    assert client.get_cookie("sessionId") is None

    client.set_cookie("sessionId", sid)
    assert client.get("/auth/session").status_code == 401


def test_login_sweeps_expired_rows(app, client, clock):
    container = get_container(app)
    login(client)
    old_sid = client.get_cookie("sessionId").value

    clock.advance(LIFETIME_MS + 1)
    login(client, "bob", "hunter2")

    store = container.session_store
    with pytest.raises(SessionNotFoundError):
        store.get(old_sid)
    assert store.get(client.get_cookie("sessionId").value).user_id == 2


def test_book_crud_for_owner(client):
    login(client)

    created = client.post(
        "/users/1/books",
        json={"titleRus": "Дюна", "authorNameRus": "Фрэнк Герберт", "publicationYear": 1965},
    )
    assert created.status_code == 201
    book_id = created.get_json()["bookId"]

    listed = client.get("/users/1/books").get_json()
    assert [b["id"] for b in listed] == [book_id]
    assert listed[0]["titleRus"] == "Дюна"

    updated = client.put(
        f"/users/1/books/{book_id}",
        json={
            "titleRus": "Дюна",
            "authorNameRus": "Фрэнк Герберт",
            "publicationYear": 1965,
            "readStatus": "read",
            "assessment": 10,
        },
    )
    assert updated.status_code == 200
    fetched = client.get(f"/users/1/books/{book_id}").get_json()
    assert fetched["readStatus"] == "read"
    assert fetched["assessment"] == 10

    assert client.delete(f"/users/1/books/{book_id}").status_code == 200
    assert client.get(f"/users/1/books/{book_id}").status_code == 404


def test_book_changes_to_foreign_list_are_forbidden(client):
    login(client)

    resp = client.post(
        "/users/2/books",
        json={"titleRus": "Дюна", "authorNameRus": "Фрэнк Герберт", "publicationYear": 1965},
    )

    assert resp.status_code == 403
    assert resp.get_json()["error"] == "forbidden"


def test_invalid_book_payload(client):
    login(client)

    resp = client.post("/users/1/books", json={"titleRus": "  ", "publicationYear": 1965})

    assert resp.status_code == 422
    body = resp.get_json()
    assert body["error"] == "validation_error"
    assert {"titleRus", "authorNameRus"} <= set(body["context"]["fields"])


def test_metrics_are_served_without_session(client):
    client.get("/users/1/books")

    resp = client.get("/metrics")

    assert resp.status_code == 200
    body = resp.get_data(as_text=True)
    assert "bookshelf_requests_total" in body
    assert 'bookshelf_session_rejections_total{reason="missing"}' in body


def test_request_id_is_echoed(client):
    resp = client.get("/auth/session", headers={"X-Request-ID": "req-42"})

    assert resp.status_code == 401
    assert resp.headers["X-Request-ID"] == "req-42"
    assert resp.headers["X-Content-Type-Options"] == "nosniff"


def test_custom_login_path(clock):
    session = SessionConfig(SESSION_LIFETIME_MS=LIFETIME_MS, LOGIN_PATH="/api/login")
    app = create_app(make_config(session), clock=clock)
    get_container(app).user_setup.create_user("alice", "secret", "Alice")
    client = app.test_client()

    assert login(client).status_code == 401

    resp = client.post("/api/login", json={"login": "alice", "password": "secret"})
    assert resp.status_code == 200
    assert client.get("/auth/session").status_code == 200


def test_login_path_must_be_absolute():
    with pytest.raises(ValueError):
        SessionConfig(LOGIN_PATH="api/login")


def test_cli_create_user(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["create-user", "carol", "--password", "pw", "--name", "Carol"])

    assert result.exit_code == 0, result.output
    assert "login=carol" in result.output
    client = app.test_client()
    assert login(client, "carol", "pw").get_json()["name"] == "Carol"


def test_cli_create_user_rejects_duplicate_login(app):
    result = app.test_cli_runner().invoke(args=["create-user", "alice", "--password", "pw"])

    assert result.exit_code != 0
    assert isinstance(result.exception, AppError)


def test_cli_sweep_sessions(app, client, clock):
    login(client)
    runner = app.test_cli_runner()

    assert "removed 0 expired sessions" in runner.invoke(args=["sweep-sessions"]).output

    clock.advance(LIFETIME_MS + 1)
    result = runner.invoke(args=["sweep-sessions"])

    assert result.exit_code == 0
    assert "removed 1 expired sessions" in result.output
