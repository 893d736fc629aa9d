"""Explicit permission entity - per-user module override."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class ExplicitPermission:
    """Grant or deny of one module for one user. Unique per (user_id, module_name)."""

    user_id: int
    module_name: str
    access_granted: bool
    created_at: datetime
    updated_at: datetime
    id: int | None = None
