"""Set user permission use case."""

import logging
from datetime import UTC, datetime

from erpaccess.application.ports import (
    AccessLogger,
    PermissionChecker,
    UnitOfWorkFactory,
)
from erpaccess.domain.entities import ExplicitPermission, PermissionChangeLogEntry
from erpaccess.domain.exceptions import InsufficientPermission, NotFound
from erpaccess.domain.value_objects import ChangeAction, Module, PermissionAction

logger = logging.getLogger(__name__)


async def require_permission_admin(
    permission_checker: PermissionChecker, admin_user_id: int
) -> None:
    """Raise InsufficientPermission unless admin may update user management."""
    decision = await permission_checker.check(
        admin_user_id, Module.USER_MANAGEMENT, PermissionAction.UPDATE
    )
    if not decision.granted:
        raise InsufficientPermission("Insufficient permissions to modify user permissions")


class SetUserPermissionUseCase:
    """Grant or deny one module for a user. Actor must have user_management:update."""

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
        access_granted: bool,
        admin_user_id: int,
    ) -> ExplicitPermission:
        """Upsert the (user, module) row, then record the change."""
        await require_permission_admin(self._permission_checker, admin_user_id)

        async with self._uow_factory() as uow:
            if not await uow.users.get_by_id(user_id):
                raise NotFound(f"User {user_id} not found")

            # read only for previous_value; the write is always an upsert
            existing = await uow.permissions.get_for_module(user_id, module_name)
            now = datetime.now(UTC)
            permission = await uow.permissions.upsert(
                ExplicitPermission(
                    user_id=user_id,
                    module_name=str(module_name),
                    access_granted=access_granted,
                    created_at=now,
                    updated_at=now,
                )
            )
            # created_at is only ours when the upsert inserted the row
            created = permission.created_at == now
            previous_value = None if created or existing is None else existing.access_granted

        logger.info(
            "User %s %s %s for user %s",
            admin_user_id,
            "granted" if access_granted else "denied",
            module_name,
            user_id,
        )
        await self._access_logger.log_permission_change(
            PermissionChangeLogEntry(
                admin_user_id=admin_user_id,
                target_user_id=user_id,
                module_name=str(module_name),
                access_granted=access_granted,
                action=ChangeAction.CREATED if created else ChangeAction.UPDATED,
                previous_value=previous_value,
                created_at=datetime.now(UTC),
            )
        )
        return permission
