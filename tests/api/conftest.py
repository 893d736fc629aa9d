"""Fixtures for API tests - Falcon app wired to the in-memory fakes."""

import pytest
from falcon.testing import TestClient

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
from erpaccess.interfaces.api.app import create_app
from erpaccess.interfaces.api.middleware.auth import AuthMiddleware
from erpaccess.interfaces.api.resources.analytics import (
    PermissionHistoryResource,
    SecurityAnalyticsResource,
    UserAccessLogsResource,
)
from erpaccess.interfaces.api.resources.health import HealthResource
from erpaccess.interfaces.api.resources.permissions import (
    BulkPermissionsResource,
    PermissionCheckResource,
    UserModulePermissionResource,
    UserPermissionsResource,
)


def _build_app(uow_factory, permission_checker, access_logger, fallback_user_id):
    set_permission = SetUserPermissionUseCase(uow_factory, permission_checker, access_logger)
    delete_permission = DeleteUserPermissionUseCase(
        uow_factory, permission_checker, access_logger
    )
    return create_app(
        check_resource=PermissionCheckResource(permission_checker),
        user_permissions_resource=UserPermissionsResource(
            GetUserPermissionsUseCase(uow_factory)
        ),
        module_permission_resource=UserModulePermissionResource(
            set_permission, delete_permission
        ),
        bulk_resource=BulkPermissionsResource(BulkSetPermissionsUseCase(set_permission)),
        user_logs_resource=UserAccessLogsResource(access_logger),
        security_resource=SecurityAnalyticsResource(access_logger),
        history_resource=PermissionHistoryResource(access_logger),
        health_resource=HealthResource(),
        middleware=[AuthMiddleware(None, fallback_user_id=fallback_user_id)],
    )


@pytest.fixture
def client(uow_factory, permission_checker, access_logger, admin_user) -> TestClient:
    """Client whose unauthenticated requests act as admin user 1."""
    return TestClient(
        _build_app(uow_factory, permission_checker, access_logger, admin_user.id)
    )


@pytest.fixture
def anonymous_client(uow_factory, permission_checker, access_logger) -> TestClient:
    """Client without a fallback identity."""
    return TestClient(_build_app(uow_factory, permission_checker, access_logger, None))


@pytest.fixture
def staff_client(uow_factory, permission_checker, access_logger, staff_user) -> TestClient:
    """Client acting as staff user 7, who may not administer permissions."""
    return TestClient(
        _build_app(uow_factory, permission_checker, access_logger, staff_user.id)
    )
