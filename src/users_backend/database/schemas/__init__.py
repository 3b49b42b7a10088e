"""Entities kept by the in-memory store."""

from users_backend.database.schemas.user import EMPTY_USER_ID, UserEntity

__all__ = ["EMPTY_USER_ID", "UserEntity"]
