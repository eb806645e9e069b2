# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import click
from flask import Flask, current_app
from flask_cors import CORS

from bookshelf.container import Container
from bookshelf.infrastructure.observability import install_metrics
from bookshelf.shared.config import AppConfig, load_config
from bookshelf.shared.errors import register_error_handler
from bookshelf.shared.logging import logger, setup_logging
from bookshelf.shared.middleware.request_logger import configure_request_logging
from bookshelf.shared.utils.clock import Clock, current_millis

EXTENSION_KEY = "bookshelf"


def get_container(app: Flask | None = None) -> Container:
    return (app or current_app).extensions[EXTENSION_KEY]


def create_app(config: AppConfig | None = None, *, clock: Clock = current_millis) -> Flask:
    config = config or load_config()
    setup_logging(config.log_level, debug_mode=config.debug_logging, log_file=config.log_file)

    container = Container(config, clock=clock)
    container.database.init_schema()
    container.user_setup.ensure_seed_user(config)

    app = Flask(__name__)
    app.extensions[EXTENSION_KEY] = container

    # Order matters: correlation ids first, then the session check.
    configure_request_logging(
        app, cookie_name=config.session.cookie_name, debug_mode=config.debug_logging
    )
    register_error_handler(app, debug_mode=config.debug_logging)
    if config.observability.metrics_enabled:
        install_metrics(app, path=config.observability.metrics_path)

    if config.cors_enabled():
        CORS(
            app,
            origins=config.security.allowed_origins,
            supports_credentials=True,
            methods=["GET", "POST", "PUT", "DELETE"],
            allow_headers=["Content-Type"],
        )

    container.auth_gate.install(app)
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.books_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        return resp

    @app.cli.command("create-user")
    @click.argument("login")
    @click.password_option()
    @click.option("--name", default=None, help="Display name.")
    def create_user_command(login: str, password: str, name: str | None) -> None:
        """Add a user that can log in."""

        user = get_container().user_setup.create_user(login, password, name)
        click.echo(f"created user id={user.id} login={user.login}")

    @app.cli.command("sweep-sessions")
    def sweep_sessions_command() -> None:
        """Delete expired sessions now."""

        removed = get_container().session_manager.sweep_expired()
        click.echo(f"removed {removed} expired sessions")

    logger.info("Flask app initialized")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True)
