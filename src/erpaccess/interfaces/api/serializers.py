"""JSON shapes of entities returned by the API."""

from erpaccess.application.dto.analytics_dto import SecurityAnalytics
from erpaccess.application.dto.permission_dto import UserPermissionSet
from erpaccess.domain.entities import (
    AccessCheckLogEntry,
    ExplicitPermission,
    PermissionChangeLogEntry,
    RolePermission,
)


def _iso(value) -> str | None:
    return value.isoformat() if value else None


def explicit_permission_to_dict(p: ExplicitPermission) -> dict:
    return {
        "id": p.id,
        "userId": p.user_id,
        "moduleName": str(p.module_name),
        "accessGranted": p.access_granted,
        "createdAt": _iso(p.created_at),
        "updatedAt": _iso(p.updated_at),
    }


def role_permission_to_dict(p: RolePermission) -> dict:
    return {
        "id": p.id,
        "role": str(p.role),
        "resource": str(p.resource),
        "action": str(p.action),
        "createdAt": _iso(p.created_at),
    }


def permission_set_to_dict(s: UserPermissionSet) -> dict:
    return {
        "explicit": [explicit_permission_to_dict(p) for p in s.explicit],
        "roleBased": [role_permission_to_dict(p) for p in s.role_based],
        "effective": list(s.effective),
    }


def access_log_to_dict(e: AccessCheckLogEntry) -> dict:
    data = {
        "id": e.id,
        "userId": e.user_id,
        "resource": e.resource,
        "action": e.action,
        "granted": e.granted,
        "reason": e.reason,
        "ipAddress": e.ip_address,
        "userAgent": e.user_agent,
        "responseTime": e.response_time_ms,
        "error": e.error,
        "createdAt": _iso(e.created_at),
    }
    if e.user_name is not None:
        data["userName"] = e.user_name
    return data


def permission_change_to_dict(e: PermissionChangeLogEntry) -> dict:
    return {
        "id": e.id,
        "adminUserId": e.admin_user_id,
        "targetUserId": e.target_user_id,
        "moduleName": e.module_name,
        "accessGranted": e.access_granted,
        "action": str(e.action),
        "previousValue": e.previous_value,
        "createdAt": _iso(e.created_at),
        "adminName": e.admin_name,
        "targetUserName": e.target_user_name,
    }


def security_analytics_to_dict(a: SecurityAnalytics) -> dict:
    return {
        "totalChecks": a.total_checks,
        "deniedAttempts": a.denied_attempts,
        "uniqueUsers": a.unique_users,
        "mostAccessedResources": [
            {"resource": r.resource, "accessCount": r.access_count}
            for r in a.most_accessed_resources
        ],
        "recentDenials": [access_log_to_dict(e) for e in a.recent_denials],
    }
