"""Common schema utilities and base classes."""

from typing import Any, List

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema whose JSON field names are camelCase (maxHp, classId, manaCost...).

    Python code can still populate fields by their snake_case names.
    """

    class Config:
        alias_generator = to_camel
        populate_by_name = True


def coerce_item_ids(value: Any) -> List[str]:
    """Accept a list of ids or of objects carrying an "id" and return the ids."""
    if value is None:
        return []
    ids = []
    for entry in value:
        if isinstance(entry, str):
            ids.append(entry)
        elif isinstance(entry, dict) and entry.get("id"):
            ids.append(str(entry["id"]))
        elif hasattr(entry, "id"):
            ids.append(entry.id)
        else:
            raise ValueError(f"Invalid inventory entry: {entry!r}")
    return ids


class MessageResponse(BaseModel):
    """Plain confirmation message returned by update/delete endpoints."""

    message: str


__all__ = [
    "CamelModel",
    "MessageResponse",
    "coerce_item_ids",
]
