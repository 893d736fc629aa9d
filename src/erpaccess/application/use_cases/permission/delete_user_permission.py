"""Delete user permission use case."""

from datetime import UTC, datetime

from erpaccess.application.ports import (
    AccessLogger,
    PermissionChecker,
    UnitOfWorkFactory,
)
from erpaccess.application.use_cases.permission.set_user_permission import (
    require_permission_admin,
)
from erpaccess.domain.entities import ExplicitPermission, PermissionChangeLogEntry
from erpaccess.domain.exceptions import NotFound
from erpaccess.domain.value_objects import ChangeAction, Module


class DeleteUserPermissionUseCase:
    """Remove an explicit permission so the user falls back to role defaults."""

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        permission_checker: PermissionChecker,
        access_logger: AccessLogger,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._access_logger = access_logger

    async def execute(
        self,
        user_id: int,
        module_name: Module,
        admin_user_id: int,
    ) -> ExplicitPermission:
        """Delete the (user, module) row. Actor must have user_management:update."""
        await require_permission_admin(self._permission_checker, admin_user_id)

        async with self._uow_factory() as uow:
            existing = await uow.permissions.get_for_module(user_id, module_name)
            if not existing:
                raise NotFound(f"Permission {user_id}/{module_name} not found")
            await uow.permissions.delete(user_id, module_name)

        await self._access_logger.log_permission_change(
            PermissionChangeLogEntry(
                admin_user_id=admin_user_id,
                target_user_id=user_id,
                module_name=str(module_name),
                access_granted=False,
                action=ChangeAction.DELETED,
                previous_value=existing.access_granted,
                created_at=datetime.now(UTC),
            )
        )
        return existing
