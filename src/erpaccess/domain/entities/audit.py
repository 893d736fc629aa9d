"""Audit log entries - append-only records of checks and permission changes."""

from dataclasses import dataclass
from datetime import datetime

from erpaccess.domain.value_objects import ChangeAction


@dataclass
class AccessCheckLogEntry:
    """One permission check and its outcome."""

    user_id: int
    resource: str
    action: str
    granted: bool
    reason: str
    response_time_ms: int
    created_at: datetime
    ip_address: str | None = None
    user_agent: str | None = None
    error: str | None = None
    id: int | None = None
    # Filled by read models from a join on users
    user_name: str | None = None


@dataclass
class PermissionChangeLogEntry:
    """One administrative mutation of an explicit permission."""

    admin_user_id: int
    target_user_id: int
    module_name: str
    access_granted: bool
    action: ChangeAction
    created_at: datetime
    previous_value: bool | None = None
    id: int | None = None
    admin_name: str | None = None
    target_user_name: str | None = None
