"""Application entry point and composition root."""

import argparse
import asyncio
import logging
import sys

from erpaccess import __version__
from erpaccess.application.use_cases.permission.bulk_set_permissions import (
    BulkSetPermissionsUseCase,
)
from erpaccess.application.use_cases.permission.delete_user_permission import (
    DeleteUserPermissionUseCase,
)
from erpaccess.application.use_cases.permission.get_user_permissions import (
    GetUserPermissionsUseCase,
)
from erpaccess.application.use_cases.permission.seed_role_permissions import (
    SeedRolePermissionsUseCase,
)
from erpaccess.application.use_cases.permission.set_user_permission import (
    SetUserPermissionUseCase,
)
from erpaccess.config import Settings, get_settings
from erpaccess.infrastructure.audit.access_logger import ERPAccessLogger
from erpaccess.infrastructure.auth.keycloak_provider import KeycloakProvider
from erpaccess.infrastructure.permission.permission_checker import ERPPermissionChecker
from erpaccess.infrastructure.persistence.postgres.connection import create_pool
from erpaccess.infrastructure.persistence.postgres.unit_of_work import (
    create_uow_factory,
)
from erpaccess.interfaces.api.app import create_app
from erpaccess.interfaces.api.middleware.auth import AuthMiddleware
from erpaccess.interfaces.api.middleware.cors import CORSMiddleware
from erpaccess.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
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

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logger from settings. ``debug`` forces DEBUG level."""
    logging.basicConfig(
        level="DEBUG" if settings.debug else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        stream=sys.stderr,
    )


def create_erp_access_app():
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    pool = create_pool(
        settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
    )
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
            user_id_claim=settings.keycloak_user_id_claim,
        )
        if settings.keycloak_client_secret
        else None
    )
    if settings.fallback_user_id is not None:
        logger.warning(
            "Unauthenticated requests act as user %s (%s environment)",
            settings.fallback_user_id,
            settings.environment,
        )

    access_logger = ERPAccessLogger(uow_factory)
    permission_checker = ERPPermissionChecker(uow_factory, access_logger)
    get_user_permissions = GetUserPermissionsUseCase(unit_of_work_factory=uow_factory)
    set_user_permission = SetUserPermissionUseCase(
        unit_of_work_factory=uow_factory,
        permission_checker=permission_checker,
        access_logger=access_logger,
    )
    delete_user_permission = DeleteUserPermissionUseCase(
        unit_of_work_factory=uow_factory,
        permission_checker=permission_checker,
        access_logger=access_logger,
    )
    bulk_set_permissions = BulkSetPermissionsUseCase(set_user_permission)

    cors_origins = [
        o.strip() for o in settings.cors_origins.split(",") if o.strip()
    ]
    return create_app(
        check_resource=PermissionCheckResource(permission_checker),
        user_permissions_resource=UserPermissionsResource(get_user_permissions),
        module_permission_resource=UserModulePermissionResource(
            set_user_permission, delete_user_permission
        ),
        bulk_resource=BulkPermissionsResource(bulk_set_permissions),
        user_logs_resource=UserAccessLogsResource(access_logger),
        security_resource=SecurityAnalyticsResource(access_logger),
        history_resource=PermissionHistoryResource(access_logger),
        health_resource=HealthResource(pool),
        middleware=[
            CORSMiddleware(cors_origins),
            PoolLifespanMiddleware(pool, startup_hooks=[access_logger.ensure_schema]),
            AuthMiddleware(keycloak, fallback_user_id=settings.fallback_user_id),
        ],
        prefix=settings.api_prefix,
    )


async def seed_role_permissions(settings: Settings) -> int:
    """Insert default role permissions into the configured database."""
    pool = create_pool(settings.database_url, min_size=1, max_size=1)
    await pool.open()
    try:
        return await SeedRolePermissionsUseCase(create_uow_factory(pool)).execute()
    finally:
        await pool.close()


def run_server(host: str, port: int) -> None:
    """Run uvicorn server."""
    import uvicorn

    app = create_erp_access_app()
    uvicorn.run(app, host=host, port=port)


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(prog="erpaccess", description="ERP access control service")
    parser.add_argument("--version", action="version", version=f"erpaccess {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)
    serve = sub.add_parser("serve", help="Run the permission API")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)
    sub.add_parser("seed-roles", help="Insert default role permissions")
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings)
    if args.command == "serve":
        run_server(args.host, args.port)
    elif args.command == "seed-roles":
        inserted = asyncio.run(seed_role_permissions(settings))
        print(f"Inserted {inserted} role permissions")
