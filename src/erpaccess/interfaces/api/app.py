"""Falcon ASGI application."""

import logging
import sys
import traceback

import falcon.asgi
from falcon.asgi import App

from erpaccess.interfaces.api.resources.analytics import (
    PermissionHistoryResource,
    SecurityAnalyticsResource,
    UserAccessLogsResource,
)
from erpaccess.interfaces.api.resources.health import HealthResource
from erpaccess.interfaces.api.resources.permissions import (
    BulkPermissionsResource,
    PermissionCheckResource,
    PermissionConfigurationResource,
    UserModulePermissionResource,
    UserPermissionsResource,
)

logger = logging.getLogger(__name__)


async def handle_unexpected_error(req, resp, ex, params) -> None:
    """Log unhandled exceptions and answer with the API error shape."""
    logger.error("Unhandled error on %s %s", req.method, req.path)
    traceback.print_exception(type(ex), ex, ex.__traceback__, file=sys.stderr)
    resp.status = falcon.HTTP_500
    resp.media = {"success": False, "error": "Internal server error"}


def create_app(
    check_resource: PermissionCheckResource,
    user_permissions_resource: UserPermissionsResource,
    module_permission_resource: UserModulePermissionResource,
    bulk_resource: BulkPermissionsResource,
    user_logs_resource: UserAccessLogsResource,
    security_resource: SecurityAnalyticsResource,
    history_resource: PermissionHistoryResource,
    health_resource: HealthResource,
    middleware: list | None = None,
    prefix: str = "/api",
) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(Exception, handle_unexpected_error)

    prefix = prefix.rstrip("/")
    app.add_route(f"{prefix}/health", health_resource)
    app.add_route(f"{prefix}/health/ready", health_resource, suffix="ready")
    app.add_route(f"{prefix}/permissions/check/{{user_id}}", check_resource)
    app.add_route(
        f"{prefix}/permissions/users/{{user_id}}/complete", user_permissions_resource
    )
    app.add_route(
        f"{prefix}/permissions/users/{{user_id}}/modules/{{module_name}}",
        module_permission_resource,
    )
    app.add_route(f"{prefix}/permissions/users/{{user_id}}/bulk", bulk_resource)
    app.add_route(f"{prefix}/permissions/configuration", PermissionConfigurationResource())
    app.add_route(f"{prefix}/permissions/analytics/user/{{user_id}}", user_logs_resource)
    app.add_route(f"{prefix}/permissions/analytics/security", security_resource)
    app.add_route(f"{prefix}/permissions/history", history_resource)
    return app
