"""Request validation helpers for API resources."""

from enum import StrEnum
from typing import Any, TypeVar

import falcon.asgi

from erpaccess.domain.exceptions import ValidationError

E = TypeVar("E", bound=StrEnum)

# ids are PostgreSQL INTEGER columns
MAX_USER_ID = 2_147_483_647


def parse_user_id(raw: str | None) -> int:
    """Parse a positive integer user id."""
    if raw is None or not raw.isascii() or not raw.isdigit():
        raise ValidationError("Invalid user ID")
    user_id = int(raw)
    if not 0 < user_id <= MAX_USER_ID:
        raise ValidationError("Invalid user ID")
    return user_id


def parse_choice(enum_cls: type[E], raw: Any, field: str) -> E:
    """Parse a catalog member (module, action) by value."""
    try:
        return enum_cls(raw)
    except ValueError:
        raise ValidationError(f"Invalid {field}: {raw}") from None


def require_string(body: dict, field: str) -> str:
    """Required non-empty string field."""
    value = body.get(field)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Missing required field: {field}")
    return value.strip()


def require_bool(body: dict, field: str) -> bool:
    """Required boolean field. Strings and numbers are rejected."""
    value = body.get(field)
    if not isinstance(value, bool):
        raise ValidationError(f"Field {field} must be a boolean")
    return value


async def read_object(req: falcon.asgi.Request) -> dict:
    """Read request body as a JSON object."""
    body = await req.get_media(default_when_empty=None)
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body
