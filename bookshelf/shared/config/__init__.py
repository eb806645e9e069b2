# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .settings import (
    SESSION_LIFETIME_MS,
    AppConfig,
    DatabaseConfig,
    ObservabilityConfig,
    SecurityConfig,
    SessionConfig,
    load_config,
)

__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "ObservabilityConfig",
    "SESSION_LIFETIME_MS",
    "SecurityConfig",
    "SessionConfig",
    "load_config",
]
