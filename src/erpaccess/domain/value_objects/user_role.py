"""User roles."""

from enum import StrEnum


class UserRole(StrEnum):
    """Roles a user can hold. Order matches the configuration catalog."""

    ADMIN = "admin"
    MANAGER = "manager"
    SALES_REP = "sales_rep"
    INVENTORY_MANAGER = "inventory_manager"
    ACCOUNTANT = "accountant"
    STAFF = "staff"


class UserStatus(StrEnum):
    """Account status. Only active accounts pass permission checks."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"
