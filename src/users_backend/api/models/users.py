"""Pydantic models for the users endpoints."""

from __future__ import annotations

from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from users_backend.database import UserEntity

LOGIN_ERROR_MESSAGE = "Login should contain only letters or digits"


def _check_login(value: str) -> str:
    if not value or not value.isalnum():
        raise ValueError(LOGIN_ERROR_MESSAGE)
    return value


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserDto(_CamelModel):
    """Public representation of a user."""

    id: UUID
    login: str
    full_name: str
    games_played: int
    current_game_id: UUID | None = None

    @classmethod
    def from_entity(cls, user: UserEntity) -> UserDto:
        return cls(
            id=user.id,
            login=user.login,
            full_name=f"{user.last_name} {user.first_name}",
            games_played=user.games_played,
            current_game_id=user.current_game_id,
        )


class UserToPostDto(_CamelModel):
    """Payload for creating a new user."""

    login: str
    first_name: str = "John"
    last_name: str = "Doe"

    @field_validator("login")
    @classmethod
    def validate_login(cls, value: str) -> str:
        return _check_login(value)

    def to_entity(self) -> UserEntity:
        return UserEntity(
            login=self.login, first_name=self.first_name, last_name=self.last_name
        )


class UserUpdateDto(_CamelModel):
    """Editable projection of a user used by PUT and PATCH."""

    login: str
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)

    @field_validator("login")
    @classmethod
    def validate_login(cls, value: str) -> str:
        return _check_login(value)

    @classmethod
    def from_entity(cls, user: UserEntity) -> UserUpdateDto:
        return cls.model_construct(
            login=user.login, first_name=user.first_name, last_name=user.last_name
        )

    def apply_to(self, user: UserEntity) -> None:
        """Copy the editable fields onto *user*."""
        user.login = self.login
        user.first_name = self.first_name
        user.last_name = self.last_name


class PatchOperation(BaseModel):
    """Single RFC 6902 operation."""

    model_config = ConfigDict(populate_by_name=True)

    op: Literal["add", "remove", "replace", "move", "copy", "test"]
    path: str
    value: Any = None
    from_: str | None = Field(default=None, alias="from")


class PaginationHeader(_CamelModel):
    """Metadata emitted in the ``X-Pagination`` response header."""

    previous_page_link: str | None
    next_page_link: str | None
    total_count: int
    page_size: int
    current_page: int
    total_pages: int


class ValidationProblem(BaseModel):
    """Error body listing the offending fields."""

    title: str
    status: int
    errors: dict[str, list[str]] = Field(default_factory=dict)


__all__ = [
    "LOGIN_ERROR_MESSAGE",
    "PaginationHeader",
    "PatchOperation",
    "UserDto",
    "UserToPostDto",
    "UserUpdateDto",
    "ValidationProblem",
]
