"""Permission checker implementation - resolves explicit and role permissions."""

import logging
import time
from datetime import UTC, datetime

from erpaccess.application.dto.permission_dto import PermissionDecision
from erpaccess.application.ports import AccessLogger, UnitOfWorkFactory
from erpaccess.domain.entities import AccessCheckLogEntry
from erpaccess.domain.value_objects import UserRole

logger = logging.getLogger(__name__)

REASON_USER_NOT_FOUND = "User not found"
REASON_USER_INACTIVE = "User account is not active"
REASON_ADMIN = "Admin role - full access"
REASON_EXPLICIT_GRANTED = "Explicit user permission granted"
REASON_EXPLICIT_DENIED = "Explicit user permission denied"
REASON_DEFAULT_DENY = "No matching permission found - access denied"


class ERPPermissionChecker:
    """Checks user permissions against explicit grants, then role defaults.

    Evaluation order, first match wins:

    1. unknown user - denied
    2. inactive account - denied
    3. admin role - granted
    4. explicit per-user module row - granted or denied as stored
    5. role permission for (role, resource, action) - granted
    6. otherwise denied

    Every call is recorded through the access logger before returning, and
    unexpected errors turn into a denial instead of propagating.
    """

    def __init__(
        self, unit_of_work_factory: UnitOfWorkFactory, access_logger: AccessLogger
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_logger = access_logger

    async def check(
        self,
        user_id: int,
        resource: str,
        action: str,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> PermissionDecision:
        """Decide access for user on resource/action and record the check."""
        started = time.perf_counter()
        error: str | None = None
        try:
            decision = await self._resolve(user_id, resource, action)
        except Exception as e:
            logger.exception(
                "Permission check failed for user %s on %s:%s", user_id, resource, action
            )
            error = str(e) or type(e).__name__
            decision = PermissionDecision(
                granted=False, reason=f"Permission check failed: {error}"
            )
        response_time_ms = int((time.perf_counter() - started) * 1000)

        await self._access_logger.log_permission_check(
            AccessCheckLogEntry(
                user_id=user_id,
                resource=str(resource),
                action=str(action),
                granted=decision.granted,
                reason=decision.reason,
                response_time_ms=response_time_ms,
                created_at=datetime.now(UTC),
                ip_address=ip_address,
                user_agent=user_agent,
                error=error,
            )
        )
        return decision

    async def _resolve(self, user_id: int, resource: str, action: str) -> PermissionDecision:
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(user_id)
            if not user:
                return PermissionDecision(granted=False, reason=REASON_USER_NOT_FOUND)
            if not user.is_active:
                return PermissionDecision(granted=False, reason=REASON_USER_INACTIVE, user=user)
            if user.role == UserRole.ADMIN:
                return PermissionDecision(granted=True, reason=REASON_ADMIN, user=user)

            explicit = await uow.permissions.get_for_module(user_id, resource)
            if explicit:
                return PermissionDecision(
                    granted=explicit.access_granted,
                    reason=(
                        REASON_EXPLICIT_GRANTED
                        if explicit.access_granted
                        else REASON_EXPLICIT_DENIED
                    ),
                    user=user,
                    permission=explicit,
                )

            role_permission = await uow.role_permissions.get(user.role, resource, action)
            if role_permission:
                return PermissionDecision(
                    granted=True,
                    reason=f"Role-based permission: {user.role} can {action} {resource}",
                    user=user,
                    permission=role_permission,
                )

            return PermissionDecision(granted=False, reason=REASON_DEFAULT_DENY, user=user)
