# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

SESSION_LIFETIME_MS = 1000 * 3600 * 24

_SECTION_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    validate_by_name=True,
    extra="ignore",
)


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///bookshelf.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")
    # Upper bound for a single store call, in seconds.
    statement_timeout: float = Field(5.0, ge=0.1, alias="DATABASE_STATEMENT_TIMEOUT")
    # Retries for transient lock or connection errors
    retry_attempts: int = Field(3, ge=1, alias="DATABASE_RETRY_ATTEMPTS")
    retry_backoff: float = Field(0.05, ge=0, alias="DATABASE_RETRY_BACKOFF")
    retry_backoff_cap: float = Field(0.5, ge=0, alias="DATABASE_RETRY_BACKOFF_CAP")

    model_config = _SECTION_CONFIG

    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")


class SessionConfig(BaseSettings):
    lifetime_ms: int = Field(SESSION_LIFETIME_MS, ge=1, alias="SESSION_LIFETIME_MS")
    cookie_name: str = Field("sessionId", alias="SESSION_COOKIE_NAME")
    cookie_secure: bool = Field(False, alias="COOKIE_SECURE")
    cookie_samesite: str = Field("Lax", alias="COOKIE_SAMESITE")
    login_path: str = Field("/auth/login", alias="LOGIN_PATH")

    model_config = _SECTION_CONFIG

    @field_validator("login_path", mode="after")
    @classmethod
    def _check_login_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("LOGIN_PATH must start with '/'")
        return value.rstrip("/") or "/"

    @property
    def cookie_max_age(self) -> int:
        return self.lifetime_ms // 1000


class SecurityConfig(BaseSettings):
    # CORS defaults to on in development only
    enable_cors: bool | None = Field(None, alias="ENABLE_CORS")
    allowed_origins: Annotated[list[str], NoDecode] = Field(
        ["http://localhost:3000"], alias="ALLOWED_ORIGINS"
    )

    # "salted" (werkzeug) or "legacy" (unsalted sha256 hex digest)
    password_hash_scheme: str = Field("salted", alias="PASSWORD_HASH_SCHEME")

    # Report unknown login and wrong password with the same error
    unify_login_errors: bool = Field(False, alias="UNIFY_LOGIN_ERRORS")

    model_config = _SECTION_CONFIG

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("password_hash_scheme", mode="after")
    @classmethod
    def _check_scheme(cls, value: str) -> str:
        value = value.lower()
        if value not in ("salted", "legacy"):
            raise ValueError("PASSWORD_HASH_SCHEME must be 'salted' or 'legacy'")
        return value


class ObservabilityConfig(BaseSettings):
    metrics_enabled: bool = Field(True, alias="METRICS_ENABLED")
    metrics_path: str = Field("/metrics", alias="METRICS_PATH")

    model_config = _SECTION_CONFIG


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _session_config_factory() -> SessionConfig:
    return SessionConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


def _observability_config_factory() -> ObservabilityConfig:
    return ObservabilityConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_file: Path | None = Field(None, alias="LOG_FILE")

    seed_user_login: str | None = Field(None, alias="SEED_USER_LOGIN")
    seed_user_password: str | None = Field(None, alias="SEED_USER_PASSWORD")
    seed_user_name: str | None = Field(None, alias="SEED_USER_NAME")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    session: SessionConfig = Field(default_factory=_session_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)
    observability: ObservabilityConfig = Field(default_factory=_observability_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        validate_by_name=True,
        extra="ignore",
    )

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        warnings = []
        if not self.session.cookie_secure:
            warnings.append("⚠️  Cookie Secure flag is DISABLED (use HTTPS!)")
        if self.security.password_hash_scheme == "legacy":
            warnings.append("⚠️  Passwords are checked against unsalted SHA-256 digests")
        if self.cors_enabled() and "*" in self.security.allowed_origins:
            warnings.append("⚠️  CORS allows wildcard (*) origins")

        if warnings:
            print("\n⚠️  PRODUCTION SECURITY WARNINGS:", file=sys.stderr)
            for warning in warnings:
                print(f"   {warning}", file=sys.stderr)
        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")

    def cors_enabled(self) -> bool:
        if self.security.enable_cors is None:
            return self.app_env.lower() in ("development", "dev")
        return self.security.enable_cors


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "ObservabilityConfig",
    "SESSION_LIFETIME_MS",
    "SecurityConfig",
    "SessionConfig",
    "load_config",
]
