"""Read models for security analytics."""

from dataclasses import dataclass, field

from erpaccess.domain.entities import AccessCheckLogEntry


@dataclass
class ResourceAccessCount:
    """Number of checks against one resource."""

    resource: str
    access_count: int


@dataclass
class SecurityAnalytics:
    """Aggregates over access checks in a trailing window."""

    total_checks: int = 0
    denied_attempts: int = 0
    unique_users: int = 0
    most_accessed_resources: list[ResourceAccessCount] = field(default_factory=list)
    recent_denials: list[AccessCheckLogEntry] = field(default_factory=list)
