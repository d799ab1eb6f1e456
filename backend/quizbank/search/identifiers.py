"""Store identifier helpers.

Identifiers exchanged with callers are 24-character hexadecimal strings.
Anything else is treated as unresolvable, never as an error.
"""

import re
from collections.abc import Iterable
from typing import Any

from bson import ObjectId

_OBJECT_ID_PATTERN = re.compile(r"[0-9a-fA-F]{24}")


def is_valid_object_id(value: Any) -> bool:
    """True for ObjectId instances and 24-character hex strings."""
    if isinstance(value, ObjectId):
        return True
    return isinstance(value, str) and _OBJECT_ID_PATTERN.fullmatch(value) is not None


def to_object_id(value: Any) -> ObjectId | None:
    """Convert to ObjectId, or None when the value is not a valid identifier."""
    if isinstance(value, ObjectId):
        return value
    if is_valid_object_id(value):
        return ObjectId(value)
    return None


def parse_object_ids(value: str | Iterable[Any] | None) -> list[ObjectId]:
    """
    Parse identifiers from a comma-separated string or an iterable.

    Blank and invalid tokens are dropped; duplicates are removed keeping the
    first occurrence.
    """
    if value is None:
        return []
    if isinstance(value, str):
        tokens: Iterable[Any] = value.split(",")
    else:
        tokens = value

    parsed: dict[ObjectId, None] = {}
    for token in tokens:
        if isinstance(token, str):
            token = token.strip()
        object_id = to_object_id(token)
        if object_id is not None:
            parsed.setdefault(object_id, None)
    return list(parsed)


def stringify_ids(document: Any) -> Any:
    """Render ObjectIds nested in a document as hex strings."""
    if isinstance(document, ObjectId):
        return str(document)
    if isinstance(document, dict):
        return {key: stringify_ids(value) for key, value in document.items()}
    if isinstance(document, list):
        return [stringify_ids(item) for item in document]
    return document
