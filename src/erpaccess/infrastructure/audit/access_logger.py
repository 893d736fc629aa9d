"""Access logger implementation - audit trail backed by the audit log repository."""

import logging
from datetime import UTC, datetime, timedelta

from erpaccess.application.dto.analytics_dto import SecurityAnalytics
from erpaccess.application.ports import UnitOfWorkFactory
from erpaccess.domain.entities import AccessCheckLogEntry, PermissionChangeLogEntry

logger = logging.getLogger(__name__)

TOP_RESOURCES_LIMIT = 10
RECENT_DENIALS_LIMIT = 20


class ERPAccessLogger:
    """Records permission checks and changes; never a blocking dependency.

    Each call runs in its own unit of work so a failed audit write cannot roll
    back the caller's transaction. Writes swallow storage errors after logging
    them; reads fall back to empty results.
    """

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def ensure_schema(self) -> None:
        """Create audit tables and indexes if missing. Run once at startup."""
        async with self._uow_factory() as uow:
            await uow.audit_logs.ensure_schema()
        logger.info("Audit log schema ready")

    async def log_permission_check(self, entry: AccessCheckLogEntry) -> None:
        """Append one access check entry."""
        try:
            async with self._uow_factory() as uow:
                await uow.audit_logs.add_check(entry)
        except Exception:
            logger.exception(
                "Failed to log permission check for user %s on %s:%s",
                entry.user_id,
                entry.resource,
                entry.action,
            )

    async def log_permission_change(self, entry: PermissionChangeLogEntry) -> None:
        """Append one permission change entry."""
        try:
            async with self._uow_factory() as uow:
                await uow.audit_logs.add_change(entry)
        except Exception:
            logger.exception(
                "Failed to log permission change by %s for user %s on %s",
                entry.admin_user_id,
                entry.target_user_id,
                entry.module_name,
            )

    async def get_user_access_logs(
        self, user_id: int, limit: int = 50
    ) -> list[AccessCheckLogEntry]:
        """Most recent checks of a user, newest first."""
        try:
            async with self._uow_factory() as uow:
                return await uow.audit_logs.list_checks_by_user(user_id, limit)
        except Exception:
            logger.exception("Failed to get access logs for user %s", user_id)
            return []

    async def get_permission_change_history(
        self, target_user_id: int | None = None, limit: int = 100
    ) -> list[PermissionChangeLogEntry]:
        """Permission changes newest first, optionally for one target user."""
        try:
            async with self._uow_factory() as uow:
                return await uow.audit_logs.list_changes(target_user_id, limit)
        except Exception:
            logger.exception("Failed to get permission change history")
            return []

    async def get_security_analytics(self, days: int = 30) -> SecurityAnalytics:
        """Aggregate checks created in the trailing number of days."""
        since = datetime.now(UTC) - timedelta(days=days)
        try:
            async with self._uow_factory() as uow:
                repo = uow.audit_logs
                return SecurityAnalytics(
                    total_checks=await repo.count_checks(since),
                    denied_attempts=await repo.count_checks(since, denied_only=True),
                    unique_users=await repo.count_unique_users(since),
                    most_accessed_resources=await repo.most_accessed_resources(
                        since, TOP_RESOURCES_LIMIT
                    ),
                    recent_denials=await repo.recent_denials(since, RECENT_DENIALS_LIMIT),
                )
        except Exception:
            logger.exception("Failed to get security analytics for %s days", days)
            return SecurityAnalytics()
