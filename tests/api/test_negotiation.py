"""Accept header handling and XML output."""

from __future__ import annotations

from typing import TYPE_CHECKING
from xml.etree import ElementTree

import pytest

from users_backend.api.negotiation import (
    JSON_MEDIA_TYPE,
    XML_MEDIA_TYPE,
    select_media_type,
)
from users_backend.database import UserEntity

if TYPE_CHECKING:
    from fastapi.testclient import TestClient

    from users_backend.database import InMemoryUserRepository


@pytest.mark.parametrize(
    ("accept", "expected"),
    [
        (None, JSON_MEDIA_TYPE),
        ("", JSON_MEDIA_TYPE),
        ("*/*", JSON_MEDIA_TYPE),
        ("application/json", JSON_MEDIA_TYPE),
        ("text/xml", XML_MEDIA_TYPE),
        ("application/xml;q=0.9, application/json;q=0.5", XML_MEDIA_TYPE),
        ("application/json;q=0, application/xml", XML_MEDIA_TYPE),
        ("text/html, application/xml", XML_MEDIA_TYPE),
        ("text/html", None),
        ("application/json;q=0", None),
    ],
)
def test_select_media_type(accept: str | None, expected: str | None) -> None:
    assert select_media_type(accept) == expected


def test_user_rendered_as_xml(
    client: TestClient, repository: InMemoryUserRepository
) -> None:
    user = repository.insert(
        UserEntity(login="johndoe", first_name="John", last_name="Doe")
    )

    response = client.get(
        f"/api/users/{user.id}", headers={"Accept": "application/xml"}
    )

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/xml")
    root = ElementTree.fromstring(response.content)
    assert root.tag == "User"
    assert root.findtext("id") == str(user.id)
    assert root.findtext("fullName") == "Doe John"
    assert root.find("currentGameId").text is None


def test_user_list_rendered_as_xml(
    client: TestClient, repository: InMemoryUserRepository
) -> None:
    for login in ("first", "second"):
        repository.insert(UserEntity(login=login, first_name="A", last_name="B"))

    response = client.get("/api/users", headers={"Accept": "text/xml"})

    root = ElementTree.fromstring(response.content)
    assert root.tag == "ArrayOfUser"
    assert [item.findtext("login") for item in root.findall("User")] == [
        "first",
        "second",
    ]
    assert "x-pagination" in response.headers


def test_created_identity_rendered_as_xml(client: TestClient) -> None:
    response = client.post(
        "/api/users", json={"login": "johndoe"}, headers={"Accept": "application/xml"}
    )

    assert response.status_code == 201
    root = ElementTree.fromstring(response.content)
    assert root.tag == "Guid"
    assert response.headers["location"].endswith(root.text)


def test_unsupported_accept_is_not_acceptable(
    client: TestClient, repository: InMemoryUserRepository
) -> None:
    user = repository.insert(UserEntity(login="johndoe", first_name="J", last_name="D"))

    response = client.get(f"/api/users/{user.id}", headers={"Accept": "text/html"})

    assert response.status_code == 406
