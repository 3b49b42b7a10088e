"""Output formatting driven by the ``Accept`` request header."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any
from xml.etree import ElementTree

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

JSON_MEDIA_TYPE = "application/json"
XML_MEDIA_TYPE = "application/xml"

_MEDIA_RANGES: dict[str, str] = {
    "*/*": JSON_MEDIA_TYPE,
    "application/*": JSON_MEDIA_TYPE,
    "application/json": JSON_MEDIA_TYPE,
    "text/json": JSON_MEDIA_TYPE,
    "application/xml": XML_MEDIA_TYPE,
    "text/xml": XML_MEDIA_TYPE,
}


class XmlResponse(Response):
    media_type = XML_MEDIA_TYPE


def _parse_accept(header: str) -> list[str]:
    """Return media ranges from an Accept header ordered by quality."""
    weighted: list[tuple[float, int, str]] = []
    for position, part in enumerate(header.split(",")):
        media_range, *params = (item.strip() for item in part.split(";"))
        if not media_range:
            continue
        quality = 1.0
        for param in params:
            name, _, value = param.partition("=")
            if name.strip().lower() == "q":
                try:
                    quality = float(value)
                except ValueError:
                    quality = 0.0
        if quality > 0:
            weighted.append((-quality, position, media_range.lower()))
    return [media_range for *_, media_range in sorted(weighted)]


def select_media_type(accept: str | None) -> str | None:
    """Pick the output media type for *accept*, or ``None`` if none fits."""
    if not accept or not accept.strip():
        return JSON_MEDIA_TYPE
    for media_range in _parse_accept(accept):
        if media_range in _MEDIA_RANGES:
            return _MEDIA_RANGES[media_range]
    return None


def get_media_type(request: Request) -> str:
    """Dependency resolving the negotiated media type or failing with 406."""
    media_type = select_media_type(request.headers.get("accept"))
    if media_type is None:
        raise HTTPException(status_code=status.HTTP_406_NOT_ACCEPTABLE)
    return media_type


def _jsonable(content: Any) -> Any:
    if isinstance(content, BaseModel):
        return content.model_dump(mode="json", by_alias=True)
    if isinstance(content, list):
        return [_jsonable(item) for item in content]
    return str(content)


def _append(parent: ElementTree.Element, name: str, value: Any) -> None:
    element = ElementTree.SubElement(parent, name)
    if isinstance(value, Mapping):
        for key, item in value.items():
            _append(element, key, item)
    elif isinstance(value, Sequence) and not isinstance(value, str):
        for item in value:
            _append(element, "item", item)
    elif value is not None:
        element.text = str(value).lower() if isinstance(value, bool) else str(value)


def to_xml(content: Any, root: str) -> bytes:
    """Serialize a model, a list of models or a scalar under *root*.

    List items are named after *root* with its ``ArrayOf`` prefix removed.
    """
    data = _jsonable(content)
    element = ElementTree.Element(root)
    if isinstance(data, list):
        item_name = root.removeprefix("ArrayOf")
        for item in data:
            _append(element, item_name, item)
    elif isinstance(data, dict):
        for key, value in data.items():
            _append(element, key, value)
    else:
        element.text = data
    return ElementTree.tostring(element, encoding="utf-8", xml_declaration=True)


def render(
    content: Any,
    media_type: str,
    *,
    root: str,
    status_code: int = status.HTTP_200_OK,
    headers: Mapping[str, str] | None = None,
) -> Response:
    """Build a response for *content* in the negotiated media type."""
    if media_type == XML_MEDIA_TYPE:
        return XmlResponse(
            content=to_xml(content, root), status_code=status_code, headers=headers
        )
    return JSONResponse(
        content=_jsonable(content), status_code=status_code, headers=headers
    )


__all__ = [
    "JSON_MEDIA_TYPE",
    "XML_MEDIA_TYPE",
    "XmlResponse",
    "get_media_type",
    "render",
    "select_media_type",
    "to_xml",
]
