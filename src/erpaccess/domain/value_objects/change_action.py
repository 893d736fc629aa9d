"""Kind of administrative permission change."""

from enum import StrEnum


class ChangeAction(StrEnum):
    """Audit action recorded for a permission change."""

    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
