# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Redaction of secrets before log records reach a sink."""

from __future__ import annotations

import re
from typing import Any

_REDACTED = "***"

# (pattern, replacement); group 1 is kept, the secret part is dropped.
_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    # sessionId=..., session_id: ..., Cookie: sessionId=...
    (re.compile(r"(session[_-]?id[\"']?\s*[:=]\s*[\"']?)[\w\-.~]{16,}", re.I), rf"\1{_REDACTED}"),
    (re.compile(r"(cookie\s*[:=]\s*)[^\s,;]{8,}", re.I), rf"\1{_REDACTED}"),
    (re.compile(r"(password(?:_hash)?[\"']?\s*[:=]\s*[\"']?)[^\"'\s,}]+", re.I), rf"\1{_REDACTED}"),
    # werkzeug hash strings such as scrypt:32768:8:1$salt$digest
    (re.compile(r"\b((?:scrypt|pbkdf2)[:\w]*\$)[^\s$]+\$[0-9a-f]+"), rf"\1{_REDACTED}"),
    # credentials inside database URLs
    (re.compile(r"(\w+(?:\+\w+)?://[^:/@\s]+:)[^@\s]+@"), rf"\1{_REDACTED}@"),
)


def sanitize_message(message: str) -> str:
    for pattern, replacement in _RULES:
        message = pattern.sub(replacement, message)
    return message


def sanitize_record(record: dict[str, Any]) -> bool:
    """Loguru sink filter: rewrites the message in place and never drops it."""

    record["message"] = sanitize_message(record["message"])
    return True


__all__ = ["sanitize_message", "sanitize_record"]
