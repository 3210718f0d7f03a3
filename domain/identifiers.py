"""Translation between the hex string ids callers see and Mongo's ObjectId."""

from typing import Any

from bson import ObjectId
from bson.errors import InvalidId

from domain.errors import IdentifierFormatError, InvalidIdentifierError


def parse_id(recipe_id: Any, *, op: str = "parse_id") -> ObjectId:
    # ObjectId also accepts 12 raw bytes and other ObjectIds. Only hex strings are ids here.
    if not isinstance(recipe_id, str):
        raise InvalidIdentifierError(
            op, recipe_id=repr(recipe_id), detail="identifier must be a string"
        )
    try:
        return ObjectId(recipe_id)
    except (InvalidId, TypeError) as exc:
        raise InvalidIdentifierError(
            op, recipe_id=recipe_id, detail="not a 24 character hex string"
        ) from exc


def format_id(value: Any, *, op: str = "format_id") -> str:
    if not isinstance(value, ObjectId):
        raise IdentifierFormatError(
            op,
            detail=f"storage assigned a {type(value).__name__}, expected ObjectId",
        )
    return str(value)
