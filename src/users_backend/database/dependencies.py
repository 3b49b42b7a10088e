"""FastAPI dependencies for store access."""

from functools import cache

from users_backend.database.repositories import InMemoryUserRepository


@cache
def get_user_repository() -> InMemoryUserRepository:
    """Return the process-wide user repository."""
    return InMemoryUserRepository()
