"""Repository helpers for working with users."""

from __future__ import annotations

import math
import threading
from collections.abc import Callable
from dataclasses import dataclass, replace
from uuid import UUID, uuid4

import structlog

from users_backend.database.schemas import UserEntity

logger = structlog.get_logger(__name__)


@dataclass(slots=True, frozen=True)
class PageList:
    """A window of users together with the paging totals."""

    items: list[UserEntity]
    total_count: int
    current_page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages


class InMemoryUserRepository:
    """Process-wide user store guarded by a single lock.

    Users are kept in insertion order. Entities are copied on every read and
    write so callers never hold a reference into the store.
    """

    def __init__(self) -> None:
        self._users: dict[UUID, UserEntity] = {}
        self._lock = threading.RLock()

    def find_by_id(self, user_id: UUID) -> UserEntity | None:
        """Return user entity by user's ID."""
        with self._lock:
            user = self._users.get(user_id)
            return replace(user) if user is not None else None

    def insert(self, user: UserEntity) -> UserEntity:
        """Store a new user, generating an identity when none is set."""
        stored = replace(user) if user.has_identity else replace(user, id=uuid4())
        with self._lock:
            self._users[stored.id] = stored
        logger.debug("user_inserted", user_id=str(stored.id))
        return replace(stored)

    def update(self, user: UserEntity) -> None:
        """Replace an existing user; unknown identities are ignored."""
        with self._lock:
            if user.id not in self._users:
                logger.warning("user_update_missing", user_id=str(user.id))
                return
            self._users[user.id] = replace(user)
        logger.debug("user_updated", user_id=str(user.id))

    def update_or_insert(self, user: UserEntity) -> tuple[UserEntity, bool]:
        """Replace the user with the same identity or insert it as given.

        The caller's identity is used verbatim for new users. Returns the
        stored copy and whether the user was newly created.
        """
        if user.id is None:
            msg = "update_or_insert requires an identity"
            raise ValueError(msg)
        stored = replace(user)
        with self._lock:
            is_new = stored.id not in self._users
            self._users[stored.id] = stored
        logger.debug("user_upserted", user_id=str(stored.id), is_new=is_new)
        return replace(stored), is_new

    def modify(
        self, user_id: UUID, change: Callable[[UserEntity], None]
    ) -> UserEntity | None:
        """Apply *change* to a copy of the user and store it, atomically.

        Returns ``None`` for unknown identities. Exceptions raised by
        *change* propagate and leave the stored user untouched.
        """
        with self._lock:
            current = self._users.get(user_id)
            if current is None:
                return None
            edited = replace(current)
            change(edited)
            edited.id = user_id
            self._users[user_id] = edited
        logger.debug("user_modified", user_id=str(user_id))
        return replace(edited)

    def delete(self, user_id: UUID) -> bool:
        """Remove the user if present and report whether it existed."""
        with self._lock:
            removed = self._users.pop(user_id, None)
        if removed is None:
            return False
        logger.debug("user_deleted", user_id=str(user_id))
        return True

    def get_page(self, page_number: int, page_size: int) -> PageList:
        """Return one page of users in insertion order."""
        if page_number < 1 or page_size < 1:
            msg = f"Invalid page window: number={page_number}, size={page_size}."
            raise ValueError(msg)
        start = (page_number - 1) * page_size
        with self._lock:
            users = list(self._users.values())
        items = [replace(user) for user in users[start : start + page_size]]
        return PageList(
            items=items,
            total_count=len(users),
            current_page=page_number,
            page_size=page_size,
        )

    def count(self) -> int:
        with self._lock:
            return len(self._users)
