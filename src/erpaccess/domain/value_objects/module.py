"""ERP modules - unit of access control."""

from enum import StrEnum


class Module(StrEnum):
    """Functional areas of the ERP that permissions are granted on."""

    DASHBOARD = "dashboard"
    INVENTORY = "inventory"
    ORDERS = "orders"
    PROCUREMENT = "procurement"
    ACCOUNTING = "accounting"
    EXPENSES = "expenses"
    INVOICES = "invoices"
    QUOTATIONS = "quotations"
    CUSTOMERS = "customers"
    SUPPLIERS = "suppliers"
    USERS = "users"
    USER_MANAGEMENT = "user_management"
    REPORTS = "reports"
    SYSTEM_PREFERENCES = "system_preferences"
    BACKUPS = "backups"
