"""Seed default role permissions.

Revision ID: 002
Revises: 001
Create Date: 2026-10-17

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

from erpaccess.domain.role_defaults import iter_default_role_permissions

revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

role_permissions = sa.table(
    "role_permissions",
    sa.column("role", sa.Text()),
    sa.column("resource", sa.Text()),
    sa.column("action", sa.Text()),
)


def upgrade() -> None:
    op.bulk_insert(
        role_permissions,
        [
            {"role": str(role), "resource": str(resource), "action": str(action)}
            for role, resource, action in iter_default_role_permissions()
        ],
    )


def downgrade() -> None:
    op.execute("DELETE FROM role_permissions")
