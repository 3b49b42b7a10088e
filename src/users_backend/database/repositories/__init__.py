"""Repositories over the in-memory store."""

from users_backend.database.repositories.user import InMemoryUserRepository, PageList

__all__ = ["InMemoryUserRepository", "PageList"]
