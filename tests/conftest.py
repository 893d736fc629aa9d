"""Pytest fixtures for access control tests."""

from __future__ import annotations

from collections import Counter
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import datetime

import pytest

from erpaccess.application.dto.analytics_dto import ResourceAccessCount
from erpaccess.domain.entities import (
    AccessCheckLogEntry,
    ExplicitPermission,
    PermissionChangeLogEntry,
    RolePermission,
    User,
)
from erpaccess.domain.role_defaults import iter_default_role_permissions
from erpaccess.domain.value_objects import UserRole, UserStatus
from erpaccess.infrastructure.audit.access_logger import ERPAccessLogger
from erpaccess.infrastructure.permission.permission_checker import ERPPermissionChecker


# --- Fake repositories ---


class FakeUserRepository:
    """In-memory user repository."""

    def __init__(self) -> None:
        self._by_id: dict[int, User] = {}

    async def get_by_id(self, user_id: int) -> User | None:
        return self._by_id.get(user_id)

    def add_user(
        self,
        user_id: int,
        role: UserRole = UserRole.STAFF,
        status: UserStatus = UserStatus.ACTIVE,
        name: str | None = None,
    ) -> User:
        """Helper to add user for tests."""
        user = User(
            id=user_id,
            username=f"user{user_id}",
            role=role,
            status=status,
            name=name,
        )
        self._by_id[user_id] = user
        return user


class FakePermissionRepository:
    """In-memory explicit permission repository keyed by (user_id, module)."""

    def __init__(self) -> None:
        self._by_key: dict[tuple[int, str], ExplicitPermission] = {}
        self._next_id = 1

    async def get_for_module(self, user_id: int, module_name: str) -> ExplicitPermission | None:
        return self._by_key.get((user_id, str(module_name)))

    async def list_by_user(self, user_id: int) -> list[ExplicitPermission]:
        return [p for (uid, _), p in self._by_key.items() if uid == user_id]

    async def upsert(self, permission: ExplicitPermission) -> ExplicitPermission:
        key = (permission.user_id, str(permission.module_name))
        current = self._by_key.get(key)
        stored = replace(permission, module_name=key[1])
        if current:
            stored.id = current.id
            stored.created_at = current.created_at
        else:
            stored.id = self._next_id
            self._next_id += 1
        self._by_key[key] = stored
        return replace(stored)

    async def delete(self, user_id: int, module_name: str) -> None:
        self._by_key.pop((user_id, str(module_name)), None)

    def all(self) -> list[ExplicitPermission]:
        """Helper to inspect stored rows."""
        return list(self._by_key.values())


class FakeRolePermissionRepository:
    """In-memory role permission repository."""

    def __init__(self) -> None:
        self._store: list[RolePermission] = []

    async def get(self, role: str, resource: str, action: str) -> RolePermission | None:
        for p in self._store:
            if p.role == role and p.resource == resource and p.action == action:
                return p
        return None

    async def list_by_role(self, role: str) -> list[RolePermission]:
        return [p for p in self._store if p.role == role]

    async def add_if_missing(self, permission: RolePermission) -> bool:
        if await self.get(permission.role, permission.resource, permission.action):
            return False
        permission.id = len(self._store) + 1
        self._store.append(permission)
        return True

    def add(self, role: str, resource: str, action: str) -> None:
        """Helper to add role permission for tests."""
        self._store.append(
            RolePermission(role=role, resource=resource, action=action, id=len(self._store) + 1)
        )

    def seed_defaults(self) -> None:
        """Helper to load the default role grants."""
        for role, resource, action in iter_default_role_permissions():
            self.add(role, resource, action)


class FakeAuditLogRepository:
    """In-memory audit log repository. Joins display names from the user repository."""

    def __init__(self, users: FakeUserRepository) -> None:
        self.checks: list[AccessCheckLogEntry] = []
        self.changes: list[PermissionChangeLogEntry] = []
        self.fail = False
        self.schema_created = 0
        self._users = users

    def _maybe_fail(self) -> None:
        if self.fail:
            raise RuntimeError("audit store unavailable")

    def _name(self, user_id: int) -> str | None:
        user = self._users._by_id.get(user_id)
        return user.display_name if user else None

    async def ensure_schema(self) -> None:
        self._maybe_fail()
        self.schema_created += 1

    async def add_check(self, entry: AccessCheckLogEntry) -> None:
        self._maybe_fail()
        entry.id = len(self.checks) + 1
        self.checks.append(entry)

    async def add_change(self, entry: PermissionChangeLogEntry) -> None:
        self._maybe_fail()
        entry.id = len(self.changes) + 1
        self.changes.append(entry)

    async def list_checks_by_user(self, user_id: int, limit: int) -> list[AccessCheckLogEntry]:
        self._maybe_fail()
        items = [e for e in self.checks if e.user_id == user_id]
        items.sort(key=lambda e: (e.created_at, e.id), reverse=True)
        return items[:limit]

    async def list_changes(
        self, target_user_id: int | None, limit: int
    ) -> list[PermissionChangeLogEntry]:
        self._maybe_fail()
        items = [
            e
            for e in self.changes
            if target_user_id is None or e.target_user_id == target_user_id
        ]
        items.sort(key=lambda e: (e.created_at, e.id), reverse=True)
        for e in items:
            e.admin_name = self._name(e.admin_user_id)
            e.target_user_name = self._name(e.target_user_id)
        return items[:limit]

    def _since(self, since: datetime) -> list[AccessCheckLogEntry]:
        return [e for e in self.checks if e.created_at >= since]

    async def count_checks(self, since: datetime, *, denied_only: bool = False) -> int:
        self._maybe_fail()
        return len([e for e in self._since(since) if not denied_only or not e.granted])

    async def count_unique_users(self, since: datetime) -> int:
        self._maybe_fail()
        return len({e.user_id for e in self._since(since)})

    async def most_accessed_resources(
        self, since: datetime, limit: int
    ) -> list[ResourceAccessCount]:
        self._maybe_fail()
        counts = Counter(e.resource for e in self._since(since))
        ordered = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
        return [ResourceAccessCount(resource=r, access_count=c) for r, c in ordered[:limit]]

    async def recent_denials(self, since: datetime, limit: int) -> list[AccessCheckLogEntry]:
        self._maybe_fail()
        items = [e for e in self._since(since) if not e.granted]
        items.sort(key=lambda e: (e.created_at, e.id), reverse=True)
        for e in items:
            e.user_name = self._name(e.user_id)
        return items[:limit]


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.users = FakeUserRepository()
        self.permissions = FakePermissionRepository()
        self.role_permissions = FakeRolePermissionRepository()
        self.audit_logs = FakeAuditLogRepository(self.users)

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """In-memory UnitOfWork shared by every unit of work opened in a test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager that yields the shared FakeUnitOfWork."""

    @asynccontextmanager
    async def _factory():
        yield fake_uow

    return _factory


@pytest.fixture
def access_logger(uow_factory) -> ERPAccessLogger:
    return ERPAccessLogger(uow_factory)


@pytest.fixture
def permission_checker(uow_factory, access_logger) -> ERPPermissionChecker:
    return ERPPermissionChecker(uow_factory, access_logger)


@pytest.fixture
def admin_user(fake_uow: FakeUnitOfWork) -> User:
    """Active admin with id 1."""
    return fake_uow.users.add_user(1, role=UserRole.ADMIN, name="Admin")


@pytest.fixture
def staff_user(fake_uow: FakeUnitOfWork) -> User:
    """Active staff user 7 with role permission (staff, inventory, read)."""
    fake_uow.role_permissions.add(UserRole.STAFF, "inventory", "read")
    return fake_uow.users.add_user(7, role=UserRole.STAFF, name="Sam Staff")
