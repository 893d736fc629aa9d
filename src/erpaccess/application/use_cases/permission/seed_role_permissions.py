"""Seed role permissions use case."""

import logging

from erpaccess.application.ports import UnitOfWorkFactory
from erpaccess.domain.entities import RolePermission
from erpaccess.domain.role_defaults import iter_default_role_permissions

logger = logging.getLogger(__name__)


class SeedRolePermissionsUseCase:
    """Insert default role entitlements that are not present yet."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self) -> int:
        """Return number of newly inserted role permissions."""
        inserted = 0
        async with self._uow_factory() as uow:
            for role, resource, action in iter_default_role_permissions():
                added = await uow.role_permissions.add_if_missing(
                    RolePermission(role=role, resource=resource, action=action)
                )
                if added:
                    inserted += 1
        logger.info("Seeded %d role permissions", inserted)
        return inserted
