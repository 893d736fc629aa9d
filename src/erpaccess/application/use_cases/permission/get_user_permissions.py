"""Get user permissions use case."""

from erpaccess.application.dto.permission_dto import UserPermissionSet
from erpaccess.application.ports import UnitOfWorkFactory
from erpaccess.domain.exceptions import NotFound


class GetUserPermissionsUseCase:
    """Explicit, role-based and effective permissions of one user."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, user_id: int) -> UserPermissionSet:
        """Resolve permissions. Explicit denies remove role modules from the effective set."""
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(user_id)
            if not user:
                raise NotFound(f"User {user_id} not found")
            explicit = await uow.permissions.list_by_user(user_id)
            role_based = await uow.role_permissions.list_by_role(user.role)

        # dict keeps insertion order and drops duplicates
        effective: dict[str, None] = {}
        for perm in explicit:
            if perm.access_granted:
                effective[str(perm.module_name)] = None

        denied = {str(p.module_name) for p in explicit if not p.access_granted}
        for perm in role_based:
            resource = str(perm.resource)
            if resource not in denied:
                effective.setdefault(resource, None)

        return UserPermissionSet(
            explicit=explicit,
            role_based=role_based,
            effective=list(effective),
        )
