# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from http import HTTPStatus
from typing import Any, ClassVar


class ErrorKind(StrEnum):
    MISSING_INPUT = "missing_input"
    INVALID_INPUT = "invalid_input"
    INVALID_CREDENTIAL = "invalid_credential"
    NOT_FOUND = "not_found"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    INTERNAL = "internal"

    @property
    def status(self) -> HTTPStatus:
        return _STATUS_BY_KIND[self]


_STATUS_BY_KIND: dict[ErrorKind, HTTPStatus] = {
    ErrorKind.MISSING_INPUT: HTTPStatus.BAD_REQUEST,
    ErrorKind.INVALID_INPUT: HTTPStatus.BAD_REQUEST,
    ErrorKind.INVALID_CREDENTIAL: HTTPStatus.UNAUTHORIZED,
    ErrorKind.NOT_FOUND: HTTPStatus.NOT_FOUND,
    ErrorKind.UNAUTHENTICATED: HTTPStatus.UNAUTHORIZED,
    ErrorKind.FORBIDDEN: HTTPStatus.FORBIDDEN,
    ErrorKind.INTERNAL: HTTPStatus.INTERNAL_SERVER_ERROR,
}


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    message: str = ""
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message or self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.message:
            payload["message"] = self.message
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class KindError(AppError):
    """Error carrying one of the :class:`ErrorKind` values as its code."""

    kind: ClassVar[ErrorKind] = ErrorKind.INTERNAL
    default_message: ClassVar[str] = ""

    def __init__(
        self,
        message: str | None = None,
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=self.kind.value,
            status=self.kind.status,
            message=message if message is not None else self.default_message,
            context=context,
        )


class MissingInputError(KindError):
    kind = ErrorKind.MISSING_INPUT
    default_message = "required field is missing"


class InvalidInputError(KindError):
    kind = ErrorKind.INVALID_INPUT
    default_message = "invalid input"


class InvalidCredentialError(KindError):
    kind = ErrorKind.INVALID_CREDENTIAL
    default_message = "incorrect password"


class NotFoundError(KindError):
    kind = ErrorKind.NOT_FOUND
    default_message = "not found"


class UnauthenticatedError(KindError):
    kind = ErrorKind.UNAUTHENTICATED
    default_message = "authentication required"


class ForbiddenError(KindError):
    kind = ErrorKind.FORBIDDEN
    default_message = "forbidden for current session user"


class InternalError(KindError):
    kind = ErrorKind.INTERNAL
    default_message = "internal error"


class InfrastructureError(InternalError):
    default_message = "storage failure"


class ValidationError(AppError):
    def __init__(
        self,
        code: str = "validation_error",
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=code,
            status=HTTPStatus.UNPROCESSABLE_ENTITY,
            context=context,
        )


__all__ = [
    "AppError",
    "ErrorKind",
    "ForbiddenError",
    "InfrastructureError",
    "InternalError",
    "InvalidCredentialError",
    "InvalidInputError",
    "KindError",
    "MissingInputError",
    "NotFoundError",
    "UnauthenticatedError",
    "ValidationError",
]
