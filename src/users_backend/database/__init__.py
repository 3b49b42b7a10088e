"""In-memory storage for users and the providers that expose it."""

from users_backend.database.dependencies import get_user_repository
from users_backend.database.repositories import InMemoryUserRepository, PageList
from users_backend.database.schemas import EMPTY_USER_ID, UserEntity

__all__ = [
    "EMPTY_USER_ID",
    "InMemoryUserRepository",
    "PageList",
    "UserEntity",
    "get_user_repository",
]
