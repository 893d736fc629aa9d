"""DTOs for permission use cases."""

from dataclasses import dataclass, field

from erpaccess.domain.entities import ExplicitPermission, RolePermission, User


@dataclass
class PermissionDecision:
    """Outcome of a permission check with its audit reason."""

    granted: bool
    reason: str
    user: User | None = None
    permission: ExplicitPermission | RolePermission | None = None


@dataclass
class UserPermissionSet:
    """Explicit, role-based and resolved permissions of a user."""

    explicit: list[ExplicitPermission]
    role_based: list[RolePermission]
    effective: list[str]


@dataclass
class BulkPermissionItem:
    """One requested change in a bulk update."""

    module_name: str
    access_granted: bool


@dataclass
class BulkPermissionError:
    """Failure of one item in a bulk update."""

    module_name: str
    error: str


@dataclass
class BulkPermissionResult:
    """Outcome of a bulk update - successes and per-item errors."""

    results: list[ExplicitPermission] = field(default_factory=list)
    errors: list[BulkPermissionError] = field(default_factory=list)

    @property
    def updated(self) -> int:
        return len(self.results)

    @property
    def failed(self) -> int:
        return len(self.errors)
