"""CRUD and listing endpoints for users."""

from __future__ import annotations

from http import HTTPStatus
from typing import Annotated
from uuid import UUID

from fastapi import (
    APIRouter,
    Body,
    Depends,
    HTTPException,
    Query,
    Request,
    status,
)
from fastapi.responses import Response
from pydantic import ValidationError

from users_backend.api.dependencies import get_user_service
from users_backend.api.errors import field_errors, problem_response
from users_backend.api.models import (
    PaginationHeader,
    PatchOperation,
    UserDto,
    UserToPostDto,
    UserUpdateDto,
    ValidationProblem,
)
from users_backend.api.negotiation import get_media_type, render
from users_backend.api.services import (
    PatchDocumentError,
    UserNotFoundError,
    UserService,
)
from users_backend.database import EMPTY_USER_ID

router = APIRouter(prefix="/users", tags=["users"])

ServiceDep = Annotated[UserService, Depends(get_user_service)]
MediaTypeDep = Annotated[str, Depends(get_media_type)]

ALLOWED_COLLECTION_METHODS = "GET, POST, OPTIONS"
HEAD_CONTENT_TYPE = "application/json; charset=utf-8"

_PROBLEM_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ValidationProblem},
    HTTPStatus.UNPROCESSABLE_ENTITY.value: {"model": ValidationProblem},
}


def require_user_id(user_id: UUID) -> UUID:
    """Reject the nil identity before the request body is validated."""
    if user_id == EMPTY_USER_ID:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User id must not be empty.",
        )
    return user_id


def _page_link(request: Request, page_number: int, page_size: int) -> str:
    return str(
        request.url.include_query_params(pageNumber=page_number, pageSize=page_size)
    )


@router.api_route(
    "/{user_id}",
    methods=["GET", "HEAD"],
    response_model=UserDto,
    responses={status.HTTP_404_NOT_FOUND: {"description": "User not found"}},
)
def get_user_by_id(
    user_id: UUID,
    request: Request,
    service: ServiceDep,
) -> Response:
    """Return a single user; HEAD only reports whether it exists."""

    try:
        user = service.get_user(user_id)
    except UserNotFoundError:
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    if request.method == "HEAD":
        return Response(
            status_code=status.HTTP_200_OK,
            headers={"Content-Type": HEAD_CONTENT_TYPE},
        )
    return render(UserDto.from_entity(user), get_media_type(request), root="User")


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=UUID,
    responses=_PROBLEM_RESPONSES,
)
def create_user(
    payload: UserToPostDto,
    request: Request,
    service: ServiceDep,
    media_type: MediaTypeDep,
) -> Response:
    """Create a user and point the client at its location."""

    user = service.create_user(payload)
    location = f"{str(request.url.replace(query='')).rstrip('/')}/{user.id}"
    return render(
        user.id,
        media_type,
        root="Guid",
        status_code=status.HTTP_201_CREATED,
        headers={"Location": location},
    )


@router.put(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        status.HTTP_201_CREATED: {"description": "User created"},
        **_PROBLEM_RESPONSES,
    },
)
def update_user(
    user_id: Annotated[UUID, Depends(require_user_id)],
    payload: UserUpdateDto,
    request: Request,
    service: ServiceDep,
) -> Response:
    """Replace a user entirely, creating it when the identity is unknown."""

    user, created = service.replace_user(user_id, payload)
    if not created:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return render(
        user.id,
        get_media_type(request),
        root="Guid",
        status_code=status.HTTP_201_CREATED,
        headers={"Location": str(request.url.replace(query=""))},
    )


@router.patch(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        status.HTTP_404_NOT_FOUND: {"description": "User not found"},
        **_PROBLEM_RESPONSES,
    },
)
def partially_update_user(
    user_id: UUID,
    operations: Annotated[list[PatchOperation], Body()],
    service: ServiceDep,
) -> Response:
    """Apply a JSON Patch document to the user's editable fields."""

    try:
        service.patch_user(user_id, operations)
    except UserNotFoundError:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    except PatchDocumentError as exc:
        return problem_response(
            HTTPStatus.UNPROCESSABLE_ENTITY, {exc.field: [exc.message]}
        )
    except ValidationError as exc:
        return problem_response(
            HTTPStatus.UNPROCESSABLE_ENTITY, field_errors(exc.errors())
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={status.HTTP_404_NOT_FOUND: {"description": "User not found"}},
)
def delete_user(user_id: UUID, service: ServiceDep) -> Response:
    """Delete a user."""

    try:
        service.delete_user(user_id)
    except UserNotFoundError:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("", response_model=list[UserDto], responses=_PROBLEM_RESPONSES)
def get_users(
    request: Request,
    service: ServiceDep,
    media_type: MediaTypeDep,
    page_number: Annotated[int | None, Query(alias="pageNumber")] = None,
    page_size: Annotated[int | None, Query(alias="pageSize")] = None,
) -> Response:
    """List users page by page with navigation metadata in ``X-Pagination``."""

    page = service.list_users(page_number, page_size)
    header = PaginationHeader(
        previous_page_link=(
            _page_link(request, page.current_page - 1, page.page_size)
            if page.has_previous
            else None
        ),
        next_page_link=(
            _page_link(request, page.current_page + 1, page.page_size)
            if page.has_next
            else None
        ),
        total_count=page.total_count,
        page_size=page.page_size,
        current_page=page.current_page,
        total_pages=page.total_pages,
    )
    users = [UserDto.from_entity(user) for user in page.items]
    return render(
        users,
        media_type,
        root="ArrayOfUser",
        headers={"X-Pagination": header.model_dump_json(by_alias=True)},
    )


@router.options("")
def get_options() -> Response:
    """Advertise the methods supported on the collection."""

    return Response(
        status_code=status.HTTP_200_OK,
        headers={"Allow": ALLOWED_COLLECTION_METHODS},
    )
