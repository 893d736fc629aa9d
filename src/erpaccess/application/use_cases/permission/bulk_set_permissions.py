"""Bulk set permissions use case."""

import logging

from erpaccess.application.dto.permission_dto import (
    BulkPermissionError,
    BulkPermissionItem,
    BulkPermissionResult,
)
from erpaccess.application.use_cases.permission.set_user_permission import (
    SetUserPermissionUseCase,
)
from erpaccess.domain.exceptions import ERPAccessError
from erpaccess.domain.value_objects import Module

logger = logging.getLogger(__name__)


class BulkSetPermissionsUseCase:
    """Apply several module permissions for one user, each item independently."""

    def __init__(self, set_user_permission: SetUserPermissionUseCase) -> None:
        self._set_permission = set_user_permission

    async def execute(
        self,
        user_id: int,
        items: list[BulkPermissionItem],
        admin_user_id: int,
    ) -> BulkPermissionResult:
        """Attempt every item; failures are collected, never abort the batch."""
        result = BulkPermissionResult()
        for item in items:
            try:
                module = Module(item.module_name)
                permission = await self._set_permission.execute(
                    user_id, module, item.access_granted, admin_user_id
                )
            except ValueError:
                result.errors.append(
                    BulkPermissionError(
                        module_name=item.module_name,
                        error=f"Unknown module: {item.module_name}",
                    )
                )
            except ERPAccessError as e:
                result.errors.append(
                    BulkPermissionError(module_name=item.module_name, error=str(e))
                )
            except Exception as e:
                logger.exception(
                    "Bulk permission update failed for user %s module %s",
                    user_id,
                    item.module_name,
                )
                result.errors.append(
                    BulkPermissionError(module_name=item.module_name, error=str(e))
                )
            else:
                result.results.append(permission)
        return result
