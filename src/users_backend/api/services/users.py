"""User management domain logic."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from users_backend.api.models import UserToPostDto, UserUpdateDto
from users_backend.api.services.patch import apply_patch
from users_backend.database import InMemoryUserRepository, PageList, UserEntity
from users_backend.settings import BackendSettings, get_settings

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from users_backend.api.models import PatchOperation

logger = structlog.get_logger(__name__)


class UserNotFoundError(Exception):
    """Raised when the requested user does not exist."""


class UserService:
    """Coordinates DTO mapping, validation and repository calls."""

    def __init__(
        self,
        repository: InMemoryUserRepository,
        *,
        settings: BackendSettings | None = None,
    ) -> None:
        config = settings or get_settings()
        self._repository = repository
        self._default_page_size = config.default_page_size
        self._max_page_size = config.max_page_size

    def get_user(self, user_id: UUID) -> UserEntity:
        user = self._repository.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def create_user(self, payload: UserToPostDto) -> UserEntity:
        user = self._repository.insert(payload.to_entity())
        logger.info("user_created", user_id=str(user.id), login=user.login)
        return user

    def replace_user(
        self, user_id: UUID, payload: UserUpdateDto
    ) -> tuple[UserEntity, bool]:
        """Upsert a full replacement; games played and current game are reset."""
        replacement = UserEntity(
            id=user_id,
            login=payload.login,
            first_name=payload.first_name,
            last_name=payload.last_name,
        )
        user, created = self._repository.update_or_insert(replacement)
        logger.info("user_replaced", user_id=str(user_id), created=created)
        return user, created

    def patch_user(
        self, user_id: UUID, operations: Iterable[PatchOperation]
    ) -> UserEntity:
        """Apply a JSON Patch to the editable projection and commit it.

        The read, patch, validation and write happen under the repository
        lock, so concurrent patches and deletes cannot interleave.

        Raises:
            UserNotFoundError: the user does not exist.
            PatchDocumentError: an operation could not be applied.
            pydantic.ValidationError: the patched projection is invalid.
        """

        def _apply(user: UserEntity) -> None:
            projection = UserUpdateDto.from_entity(user).model_dump(by_alias=True)
            patched = UserUpdateDto.model_validate(apply_patch(operations, projection))
            patched.apply_to(user)

        user = self._repository.modify(user_id, _apply)
        if user is None:
            raise UserNotFoundError(user_id)
        logger.info("user_patched", user_id=str(user_id))
        return user

    def delete_user(self, user_id: UUID) -> None:
        if not self._repository.delete(user_id):
            raise UserNotFoundError(user_id)
        logger.info("user_deleted", user_id=str(user_id))

    def list_users(
        self, page_number: int | None = None, page_size: int | None = None
    ) -> PageList:
        """Return a page with the number and size clamped into range."""
        number = max(page_number if page_number is not None else 1, 1)
        size = page_size if page_size is not None else self._default_page_size
        size = min(max(size, 1), self._max_page_size)
        return self._repository.get_page(number, size)


__all__ = ["UserNotFoundError", "UserService"]
