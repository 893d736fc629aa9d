"""User repository port."""

from typing import Protocol

from erpaccess.domain.entities import User


class UserRepository(Protocol):
    """Port for reading users owned by user management."""

    async def get_by_id(self, user_id: int) -> User | None: ...
