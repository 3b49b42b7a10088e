from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import uuid4

import pytest

from users_backend.database import UserEntity

if TYPE_CHECKING:
    from fastapi.testclient import TestClient

    from users_backend.database import InMemoryUserRepository


@pytest.fixture
def user(repository: InMemoryUserRepository) -> UserEntity:
    return repository.insert(
        UserEntity(
            login="johndoe",
            first_name="John",
            last_name="Doe",
            games_played=7,
            current_game_id=uuid4(),
        )
    )


def test_patch_updates_fields_and_keeps_counters(
    client: TestClient, repository: InMemoryUserRepository, user: UserEntity
) -> None:
    response = client.patch(
        f"/api/users/{user.id}",
        json=[
            {"op": "replace", "path": "/login", "value": "jdoe42"},
            {"op": "replace", "path": "/FirstName", "value": "Jack"},
        ],
    )

    assert response.status_code == 204
    stored = repository.find_by_id(user.id)
    assert stored.login == "jdoe42"
    assert stored.first_name == "Jack"
    assert stored.last_name == "Doe"
    assert stored.games_played == 7
    assert stored.current_game_id == user.current_game_id


def test_patch_with_invalid_login_is_rejected(
    client: TestClient, repository: InMemoryUserRepository, user: UserEntity
) -> None:
    response = client.patch(
        f"/api/users/{user.id}",
        json=[{"op": "replace", "path": "/login", "value": "ab!c"}],
    )

    assert response.status_code == 422
    assert "login" in response.json()["errors"]
    assert repository.find_by_id(user.id).login == "johndoe"


def test_patch_removing_required_field_is_rejected(
    client: TestClient, user: UserEntity
) -> None:
    response = client.patch(
        f"/api/users/{user.id}", json=[{"op": "remove", "path": "/lastName"}]
    )

    assert response.status_code == 422
    assert "lastName" in response.json()["errors"]


def test_patch_unknown_path_is_rejected(client: TestClient, user: UserEntity) -> None:
    response = client.patch(
        f"/api/users/{user.id}",
        json=[{"op": "replace", "path": "/gamesPlayed", "value": 100}],
    )

    assert response.status_code == 422
    assert "gamesPlayed" in response.json()["errors"]


def test_patch_missing_user_returns_not_found(client: TestClient) -> None:
    response = client.patch(
        f"/api/users/{uuid4()}",
        json=[{"op": "replace", "path": "/login", "value": "abc"}],
    )

    assert response.status_code == 404


def test_patch_without_document_is_bad_request(
    client: TestClient, user: UserEntity
) -> None:
    assert client.patch(f"/api/users/{user.id}").status_code == 400


def test_patch_with_object_body_is_bad_request(
    client: TestClient, user: UserEntity
) -> None:
    response = client.patch(f"/api/users/{user.id}", json={"login": "abc"})

    assert response.status_code == 400
