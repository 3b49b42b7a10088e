"""Models used for API request and response payloads."""

from users_backend.api.models.users import (
    LOGIN_ERROR_MESSAGE,
    PaginationHeader,
    PatchOperation,
    UserDto,
    UserToPostDto,
    UserUpdateDto,
    ValidationProblem,
)

__all__ = [
    "LOGIN_ERROR_MESSAGE",
    "PaginationHeader",
    "PatchOperation",
    "UserDto",
    "UserToPostDto",
    "UserUpdateDto",
    "ValidationProblem",
]
