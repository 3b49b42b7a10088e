"""JSON Patch (RFC 6902) support for flat projections."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from users_backend.api.models import PatchOperation


class PatchDocumentError(Exception):
    """Raised when a patch operation cannot be applied."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


def _resolve(path: str | None, target: Mapping[str, Any]) -> str:
    """Return the projection key addressed by a JSON pointer like ``/login``."""
    if not path or not path.startswith("/") or "/" in path[1:]:
        raise PatchDocumentError(
            (path or "").lstrip("/") or "path",
            f"The path '{path}' does not address a top-level field.",
        )
    segment = path[1:].replace("~1", "/").replace("~0", "~")
    for key in target:
        if key.lower() == segment.lower():
            return key
    raise PatchDocumentError(segment, f"The target location '{segment}' was not found.")


def apply_patch(
    operations: Iterable[PatchOperation], target: Mapping[str, Any]
) -> dict[str, Any]:
    """Apply *operations* in order and return the patched copy of *target*.

    ``remove`` clears the field to ``None`` since every projection key is a
    fixed attribute; validation of the result is left to the caller.
    """
    result = dict(target)
    for operation in operations:
        key = _resolve(operation.path, result)
        if operation.op in ("add", "replace"):
            result[key] = operation.value
        elif operation.op == "remove":
            result[key] = None
        elif operation.op in ("copy", "move"):
            source = _resolve(operation.from_, result)
            result[key] = result[source]
            if operation.op == "move" and source != key:
                result[source] = None
        elif operation.op == "test":
            if result[key] != operation.value:
                raise PatchDocumentError(
                    key, f"The current value of '{key}' is not equal to the test value."
                )
    return result


__all__ = ["PatchDocumentError", "apply_patch"]
