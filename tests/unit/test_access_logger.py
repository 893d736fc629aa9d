"""Unit tests for the access logger."""

from datetime import UTC, datetime, timedelta

import pytest

from erpaccess.domain.entities import AccessCheckLogEntry, PermissionChangeLogEntry
from erpaccess.domain.value_objects import ChangeAction, UserRole


def _check(
    user_id: int,
    resource: str = "inventory",
    granted: bool = True,
    created_at: datetime | None = None,
) -> AccessCheckLogEntry:
    return AccessCheckLogEntry(
        user_id=user_id,
        resource=resource,
        action="read",
        granted=granted,
        reason="test",
        response_time_ms=1,
        created_at=created_at or datetime.now(UTC),
    )


def _change(
    target_user_id: int, admin_user_id: int = 1, created_at: datetime | None = None
) -> PermissionChangeLogEntry:
    return PermissionChangeLogEntry(
        admin_user_id=admin_user_id,
        target_user_id=target_user_id,
        module_name="reports",
        access_granted=True,
        action=ChangeAction.CREATED,
        created_at=created_at or datetime.now(UTC),
    )


@pytest.mark.asyncio
async def test_security_analytics_counts(access_logger, fake_uow) -> None:
    fake_uow.users.add_user(2, name="Dana")
    for i in range(10):
        user_id = 2 if i % 2 else 3
        resource = "inventory" if i < 6 else "reports"
        await access_logger.log_permission_check(_check(user_id, resource, granted=i >= 3))

    analytics = await access_logger.get_security_analytics(30)

    assert analytics.total_checks == 10
    assert analytics.denied_attempts == 3
    assert analytics.unique_users == 2
    assert [(r.resource, r.access_count) for r in analytics.most_accessed_resources] == [
        ("inventory", 6),
        ("reports", 4),
    ]
    assert len(analytics.recent_denials) == 3
    assert all(not e.granted for e in analytics.recent_denials)
    assert {e.user_name for e in analytics.recent_denials} == {"Dana", None}


@pytest.mark.asyncio
async def test_security_analytics_window_excludes_old_checks(access_logger) -> None:
    old = datetime.now(UTC) - timedelta(days=45)
    await access_logger.log_permission_check(_check(2, granted=False, created_at=old))
    await access_logger.log_permission_check(_check(3))

    analytics = await access_logger.get_security_analytics(30)

    assert analytics.total_checks == 1
    assert analytics.denied_attempts == 0
    assert analytics.recent_denials == []


@pytest.mark.asyncio
async def test_user_access_logs_newest_first(access_logger) -> None:
    base = datetime.now(UTC)
    for minutes in (30, 10, 20):
        await access_logger.log_permission_check(
            _check(5, created_at=base - timedelta(minutes=minutes))
        )
    await access_logger.log_permission_check(_check(6))

    logs = await access_logger.get_user_access_logs(5, limit=2)

    assert len(logs) == 2
    assert [e.user_id for e in logs] == [5, 5]
    assert logs[0].created_at > logs[1].created_at
    assert logs[0].created_at == base - timedelta(minutes=10)


@pytest.mark.asyncio
async def test_change_history_filter_and_names(access_logger, fake_uow, admin_user) -> None:
    fake_uow.users.add_user(7, role=UserRole.STAFF, name="Sam Staff")
    fake_uow.users.add_user(8, role=UserRole.STAFF)
    await access_logger.log_permission_change(_change(7))
    await access_logger.log_permission_change(_change(8))

    everything = await access_logger.get_permission_change_history()
    only_seven = await access_logger.get_permission_change_history(7)

    assert len(everything) == 2
    [change] = only_seven
    assert change.target_user_id == 7
    assert change.admin_name == "Admin"
    assert change.target_user_name == "Sam Staff"
    # users without a name fall back to username
    assert everything[0].target_user_name == "user8"


@pytest.mark.asyncio
async def test_write_failures_are_swallowed(access_logger, fake_uow) -> None:
    fake_uow.audit_logs.fail = True

    await access_logger.log_permission_check(_check(2))
    await access_logger.log_permission_change(_change(2))

    assert fake_uow.audit_logs.checks == []
    assert fake_uow.audit_logs.changes == []


@pytest.mark.asyncio
async def test_read_failures_degrade_to_empty(access_logger, fake_uow) -> None:
    await access_logger.log_permission_check(_check(2))
    fake_uow.audit_logs.fail = True

    assert await access_logger.get_user_access_logs(2) == []
    assert await access_logger.get_permission_change_history() == []
    analytics = await access_logger.get_security_analytics()
    assert analytics.total_checks == 0
    assert analytics.most_accessed_resources == []


@pytest.mark.asyncio
async def test_ensure_schema(access_logger, fake_uow) -> None:
    await access_logger.ensure_schema()

    assert fake_uow.audit_logs.schema_created == 1


@pytest.mark.asyncio
async def test_ensure_schema_propagates_errors(access_logger, fake_uow) -> None:
    fake_uow.audit_logs.fail = True

    with pytest.raises(RuntimeError):
        await access_logger.ensure_schema()
