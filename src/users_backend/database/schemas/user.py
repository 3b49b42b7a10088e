"""User entity stored by the repository."""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

EMPTY_USER_ID = UUID(int=0)


@dataclass(slots=True, kw_only=True)
class UserEntity:
    """Plain record describing a registered user."""

    id: UUID | None = None
    login: str
    first_name: str
    last_name: str
    games_played: int = 0
    current_game_id: UUID | None = None

    @property
    def has_identity(self) -> bool:
        """Whether an identity other than the nil UUID is assigned."""
        return self.id is not None and self.id != EMPTY_USER_ID
