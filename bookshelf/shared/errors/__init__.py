from .base import (
    AppError,
    ErrorKind,
    ForbiddenError,
    InfrastructureError,
    InternalError,
    InvalidCredentialError,
    InvalidInputError,
    KindError,
    MissingInputError,
    NotFoundError,
    UnauthenticatedError,
    ValidationError,
)
from .http import handle_app_error, register_error_handler

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
    "handle_app_error",
    "register_error_handler",
]
