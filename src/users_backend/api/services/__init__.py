"""Service layer for API-specific business logic."""

from users_backend.api.services.patch import PatchDocumentError, apply_patch
from users_backend.api.services.users import UserNotFoundError, UserService

__all__ = [
    "PatchDocumentError",
    "UserNotFoundError",
    "UserService",
    "apply_patch",
]
