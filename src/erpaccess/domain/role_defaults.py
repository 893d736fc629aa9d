"""Default role entitlements seeded into role_permissions."""

from collections.abc import Iterator

from erpaccess.domain.value_objects import Module, PermissionAction, UserRole

_ALL_ACTIONS = tuple(PermissionAction)

DEFAULT_ROLE_GRANTS: dict[UserRole, tuple[tuple[Module, ...], tuple[PermissionAction, ...]]] = {
    UserRole.ADMIN: (tuple(Module), _ALL_ACTIONS),
    UserRole.MANAGER: (
        (
            Module.DASHBOARD,
            Module.INVENTORY,
            Module.ORDERS,
            Module.PROCUREMENT,
            Module.ACCOUNTING,
            Module.EXPENSES,
            Module.INVOICES,
            Module.QUOTATIONS,
            Module.CUSTOMERS,
            Module.SUPPLIERS,
            Module.REPORTS,
        ),
        _ALL_ACTIONS,
    ),
    UserRole.SALES_REP: (
        (
            Module.DASHBOARD,
            Module.CUSTOMERS,
            Module.QUOTATIONS,
            Module.INVOICES,
            Module.INVENTORY,
        ),
        (
            PermissionAction.CREATE,
            PermissionAction.READ,
            PermissionAction.UPDATE,
            PermissionAction.EXPORT,
        ),
    ),
    UserRole.INVENTORY_MANAGER: (
        (
            Module.DASHBOARD,
            Module.INVENTORY,
            Module.ORDERS,
            Module.PROCUREMENT,
            Module.SUPPLIERS,
        ),
        (
            PermissionAction.CREATE,
            PermissionAction.READ,
            PermissionAction.UPDATE,
            PermissionAction.DELETE,
            PermissionAction.EXPORT,
        ),
    ),
    UserRole.ACCOUNTANT: (
        (
            Module.DASHBOARD,
            Module.ACCOUNTING,
            Module.EXPENSES,
            Module.INVOICES,
            Module.CUSTOMERS,
            Module.REPORTS,
        ),
        (
            PermissionAction.CREATE,
            PermissionAction.READ,
            PermissionAction.UPDATE,
            PermissionAction.EXPORT,
        ),
    ),
    UserRole.STAFF: (
        (Module.DASHBOARD, Module.INVENTORY, Module.CUSTOMERS),
        (PermissionAction.READ,),
    ),
}


def iter_default_role_permissions() -> Iterator[tuple[UserRole, Module, PermissionAction]]:
    """Yield (role, resource, action) for every default grant."""
    for role, (modules, actions) in DEFAULT_ROLE_GRANTS.items():
        for module in modules:
            for action in actions:
                yield role, module, action
