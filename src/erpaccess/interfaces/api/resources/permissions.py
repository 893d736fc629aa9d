"""Permissions API resources."""

from datetime import UTC, datetime

import falcon.asgi

from erpaccess.application.dto.permission_dto import BulkPermissionItem
from erpaccess.application.ports import PermissionChecker
from erpaccess.application.use_cases.permission.bulk_set_permissions import (
    BulkSetPermissionsUseCase,
)
from erpaccess.application.use_cases.permission.delete_user_permission import (
    DeleteUserPermissionUseCase,
)
from erpaccess.application.use_cases.permission.get_user_permissions import (
    GetUserPermissionsUseCase,
)
from erpaccess.application.use_cases.permission.set_user_permission import (
    SetUserPermissionUseCase,
)
from erpaccess.domain.exceptions import InsufficientPermission, NotFound, ValidationError
from erpaccess.domain.value_objects import Module, PermissionAction, UserRole
from erpaccess.interfaces.api.serializers import (
    explicit_permission_to_dict,
    permission_set_to_dict,
)
from erpaccess.interfaces.api.validation import (
    parse_choice,
    parse_user_id,
    read_object,
    require_bool,
    require_string,
)

MODULES = [m.value for m in Module]
ACTIONS = [a.value for a in PermissionAction]
ROLES = [r.value for r in UserRole]


def _acting_user_id(req: falcon.asgi.Request) -> int | None:
    user = getattr(req.context, "user", None)
    return user.user_id if user else None


def _unauthorized(resp: falcon.asgi.Response) -> None:
    resp.status = falcon.HTTP_401
    resp.media = {"success": False, "error": "Unauthorized"}


def _fail(resp: falcon.asgi.Response, status: str, error: str) -> None:
    resp.status = status
    resp.media = {"success": False, "error": error}


class PermissionCheckResource:
    """POST /permissions/check/{user_id} - real-time permission check."""

    def __init__(self, permission_checker: PermissionChecker) -> None:
        self._checker = permission_checker

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        user_id: str,
    ) -> None:
        """Check whether user may perform action on resource."""
        try:
            uid = parse_user_id(user_id)
            body = await read_object(req)
            resource = parse_choice(Module, require_string(body, "resource"), "resource")
            action = parse_choice(
                PermissionAction, require_string(body, "action"), "action"
            )
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        decision = await self._checker.check(
            uid,
            resource,
            action,
            ip_address=req.remote_addr,
            user_agent=req.user_agent,
        )
        resp.media = {
            "granted": decision.granted,
            "reason": decision.reason,
            "timestamp": datetime.now(UTC).isoformat(),
        }
        resp.status = falcon.HTTP_200


class UserPermissionsResource:
    """GET /permissions/users/{user_id}/complete - explicit, role and effective permissions."""

    def __init__(self, get_user_permissions: GetUserPermissionsUseCase) -> None:
        self._get_permissions = get_user_permissions

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        user_id: str,
    ) -> None:
        try:
            uid = parse_user_id(user_id)
        except ValidationError as e:
            _fail(resp, falcon.HTTP_400, str(e))
            return

        try:
            permissions = await self._get_permissions.execute(uid)
        except NotFound as e:
            _fail(resp, falcon.HTTP_404, str(e))
            return

        resp.media = {
            "success": True,
            "data": permission_set_to_dict(permissions),
            "modules": MODULES,
            "actions": ACTIONS,
        }
        resp.status = falcon.HTTP_200


class UserModulePermissionResource:
    """POST/DELETE /permissions/users/{user_id}/modules/{module_name}."""

    def __init__(
        self,
        set_user_permission: SetUserPermissionUseCase,
        delete_user_permission: DeleteUserPermissionUseCase,
    ) -> None:
        self._set = set_user_permission
        self._delete = delete_user_permission

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        user_id: str,
        module_name: str,
    ) -> None:
        """Grant or deny module for user."""
        admin_user_id = _acting_user_id(req)
        if admin_user_id is None:
            _unauthorized(resp)
            return

        try:
            uid = parse_user_id(user_id)
            module = parse_choice(Module, module_name, "module")
            body = await read_object(req)
            access_granted = require_bool(body, "accessGranted")
        except ValidationError as e:
            _fail(resp, falcon.HTTP_400, str(e))
            return

        try:
            permission = await self._set.execute(uid, module, access_granted, admin_user_id)
        except InsufficientPermission as e:
            _fail(resp, falcon.HTTP_403, str(e))
            return
        except NotFound as e:
            _fail(resp, falcon.HTTP_404, str(e))
            return

        resp.media = {
            "success": True,
            "data": explicit_permission_to_dict(permission),
            "message": f"Permission {'granted' if access_granted else 'denied'} for {module}",
        }
        resp.status = falcon.HTTP_200

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        user_id: str,
        module_name: str,
    ) -> None:
        """Remove explicit permission so role defaults apply again."""
        admin_user_id = _acting_user_id(req)
        if admin_user_id is None:
            _unauthorized(resp)
            return

        try:
            uid = parse_user_id(user_id)
            module = parse_choice(Module, module_name, "module")
        except ValidationError as e:
            _fail(resp, falcon.HTTP_400, str(e))
            return

        try:
            removed = await self._delete.execute(uid, module, admin_user_id)
        except InsufficientPermission as e:
            _fail(resp, falcon.HTTP_403, str(e))
            return
        except NotFound as e:
            _fail(resp, falcon.HTTP_404, str(e))
            return

        resp.media = {
            "success": True,
            "data": explicit_permission_to_dict(removed),
            "message": f"Permission removed for {module}",
        }
        resp.status = falcon.HTTP_200


class BulkPermissionsResource:
    """POST /permissions/users/{user_id}/bulk - set several module permissions."""

    def __init__(self, bulk_set_permissions: BulkSetPermissionsUseCase) -> None:
        self._bulk = bulk_set_permissions

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        user_id: str,
    ) -> None:
        admin_user_id = _acting_user_id(req)
        if admin_user_id is None:
            _unauthorized(resp)
            return

        try:
            uid = parse_user_id(user_id)
            body = await read_object(req)
            raw_items = body.get("permissions")
            if not isinstance(raw_items, list):
                raise ValidationError("Field permissions must be a list")
            items = []
            for raw in raw_items:
                if not isinstance(raw, dict):
                    raise ValidationError("Each permission must be an object")
                items.append(
                    BulkPermissionItem(
                        module_name=require_string(raw, "moduleName"),
                        access_granted=require_bool(raw, "accessGranted"),
                    )
                )
        except ValidationError as e:
            _fail(resp, falcon.HTTP_400, str(e))
            return

        result = await self._bulk.execute(uid, items, admin_user_id)
        resp.media = {
            "success": result.failed == 0,
            "data": {
                "updated": result.updated,
                "failed": result.failed,
                "results": [explicit_permission_to_dict(p) for p in result.results],
                "errors": [
                    {"moduleName": e.module_name, "error": e.error} for e in result.errors
                ],
            },
            "message": f"Updated {result.updated} permissions, {result.failed} errors",
        }
        resp.status = falcon.HTTP_200


class PermissionConfigurationResource:
    """GET /permissions/configuration - module, action and role catalogs."""

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        resp.media = {
            "success": True,
            "data": {"modules": MODULES, "actions": ACTIONS, "roles": ROLES},
        }
        resp.status = falcon.HTTP_200
