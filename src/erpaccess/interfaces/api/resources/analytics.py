"""Access log analytics and permission history resources."""

import falcon.asgi

from erpaccess.application.ports import AccessLogger
from erpaccess.domain.exceptions import ValidationError
from erpaccess.interfaces.api.serializers import (
    access_log_to_dict,
    permission_change_to_dict,
    security_analytics_to_dict,
)
from erpaccess.interfaces.api.validation import parse_user_id

MAX_LIMIT = 500
MAX_DAYS = 365


def _bounded(value: int | None, default: int, maximum: int) -> int:
    if not value:
        return default
    return min(max(value, 1), maximum)


class UserAccessLogsResource:
    """GET /permissions/analytics/user/{user_id} - recent checks of a user."""

    def __init__(self, access_logger: AccessLogger) -> None:
        self._access_logger = access_logger

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        user_id: str,
    ) -> None:
        try:
            uid = parse_user_id(user_id)
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"success": False, "error": str(e)}
            return

        limit = _bounded(req.get_param_as_int("limit"), 50, MAX_LIMIT)
        logs = await self._access_logger.get_user_access_logs(uid, limit)
        resp.media = {
            "success": True,
            "data": {
                "userId": uid,
                "logs": [access_log_to_dict(e) for e in logs],
                "totalLogs": len(logs),
            },
        }
        resp.status = falcon.HTTP_200


class SecurityAnalyticsResource:
    """GET /permissions/analytics/security - system-wide check statistics."""

    def __init__(self, access_logger: AccessLogger) -> None:
        self._access_logger = access_logger

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        days = _bounded(req.get_param_as_int("days"), 30, MAX_DAYS)
        analytics = await self._access_logger.get_security_analytics(days)
        resp.media = {
            "success": True,
            "data": security_analytics_to_dict(analytics),
            "period": f"{days} days",
        }
        resp.status = falcon.HTTP_200


class PermissionHistoryResource:
    """GET /permissions/history - audit trail of permission changes."""

    def __init__(self, access_logger: AccessLogger) -> None:
        self._access_logger = access_logger

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        target_user_id = None
        raw_user_id = req.get_param("userId")
        if raw_user_id:
            try:
                target_user_id = parse_user_id(raw_user_id)
            except ValidationError as e:
                resp.status = falcon.HTTP_400
                resp.media = {"success": False, "error": str(e)}
                return

        limit = _bounded(req.get_param_as_int("limit"), 100, MAX_LIMIT)
        changes = await self._access_logger.get_permission_change_history(
            target_user_id, limit
        )
        resp.media = {
            "success": True,
            "data": {
                "changes": [permission_change_to_dict(c) for c in changes],
                "totalChanges": len(changes),
                "filteredByUser": target_user_id,
            },
        }
        resp.status = falcon.HTTP_200
