from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from bookshelf.domain.sessions.entities import SessionContext
from bookshelf.domain.users.entities import Identity


class LoginRequestDTO(BaseModel):
    # Emptiness is reported by the credential check as missing input.
    login: str | None = Field(
        None, max_length=64, validation_alias=AliasChoices("login", "username")
    )
    password: str | None = Field(None, max_length=128)


class IdentityDTO(BaseModel):
    id: int
    login: str
    name: str | None = None

    @classmethod
    def from_identity(cls, identity: Identity) -> IdentityDTO:
        return cls(id=identity.id, login=identity.login, name=identity.name)


class SessionDataDTO(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, validate_by_name=True)

    user_id: int
    user_login: str
    user_name: str | None
    session_id: str
    session_start: int
    session_end: int
    is_valid: bool

    @classmethod
    def from_context(cls, context: SessionContext) -> SessionDataDTO:
        return cls(
            user_id=context.user_id,
            user_login=context.user_login,
            user_name=context.user_name,
            session_id=context.session_id,
            session_start=context.session_start,
            session_end=context.session_end,
            is_valid=context.is_valid,
        )


class AuthSuccessDTO(BaseModel):
    ok: bool = True
