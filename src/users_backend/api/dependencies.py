"""Dependency providers for FastAPI routers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from users_backend.api.services import UserService
from users_backend.database import InMemoryUserRepository, get_user_repository
from users_backend.settings import BackendSettings, get_settings


def get_user_service(
    repository: Annotated[InMemoryUserRepository, Depends(get_user_repository)],
    settings: Annotated[BackendSettings, Depends(get_settings)],
) -> UserService:
    """Return a :class:`UserService` bound to the shared repository."""

    return UserService(repository, settings=settings)


__all__ = ["get_user_service"]
