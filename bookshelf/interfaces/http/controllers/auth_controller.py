# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from bookshelf.application.use_cases.auth.login_user import LoginUserUseCase
from bookshelf.application.use_cases.auth.logout_user import LogoutUserUseCase
from bookshelf.infrastructure.observability import LOGIN_COUNTER
from bookshelf.interfaces.http.auth_gate import current_session
from bookshelf.interfaces.http.dto.auth import (
    AuthSuccessDTO,
    IdentityDTO,
    LoginRequestDTO,
    SessionDataDTO,
)
from bookshelf.shared.config import SessionConfig
from bookshelf.shared.errors.base import AppError, UnauthenticatedError
from bookshelf.shared.errors.validation import raise_validation_error
from bookshelf.shared.logging import logger


class AuthController:
    def __init__(
        self,
        *,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        session_config: SessionConfig,
    ) -> None:
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._session_config = session_config

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        try:
            result = self._login_use_case.execute(dto.login, dto.password)
        except AppError as exc:
            LOGIN_COUNTER.labels(outcome=exc.code).inc()
            raise
        LOGIN_COUNTER.labels(outcome="ok").inc()

        response = jsonify(IdentityDTO.from_identity(result.identity).model_dump())
        config = self._session_config
        response.set_cookie(
            config.cookie_name,
            result.session_id,
            max_age=config.cookie_max_age,
            path="/",
            httponly=True,
            samesite=config.cookie_samesite,
            secure=config.cookie_secure,
        )
        logger.info(f"auth.login: ok user_id={result.identity.id}")
        return response, 200

    def logout(self) -> tuple[Response, int]:
        context = current_session()
        self._logout_use_case.execute(context)

        response = jsonify(AuthSuccessDTO().model_dump())
        response.delete_cookie(self._session_config.cookie_name, path="/")
        logger.info(f"auth.logout: ok user_id={context.user_id if context else None}")
        return response, 200

    def session_data(self) -> tuple[Response, int]:
        context = current_session()
        if context is None:
            raise UnauthenticatedError()
        return jsonify(SessionDataDTO.from_context(context).model_dump(by_alias=True)), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__)
        # Same path the session check leaves open.
        bp.add_url_rule(self._session_config.login_path, view_func=self.login, methods=["POST"])
        bp.add_url_rule("/auth/logout", view_func=self.logout, methods=["POST"])
        bp.add_url_rule("/auth/session", view_func=self.session_data, methods=["GET"])
        return bp
