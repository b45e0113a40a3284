"""
User repository - all user row access in one place.
"""

from typing import Any

from sqlalchemy import exists, select

from accounts.db.models.user import User
from accounts.db.repositories.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    """User-specific queries on top of the generic repository."""

    def __init__(self, session):
        super().__init__(session, User)

    async def find_by_id(self, id: str) -> User | None:
        return await self.get_by_id(id)

    async def find_by_name(self, name: str) -> User | None:
        result = await self.session.execute(select(User).where(User.name == name))
        return result.scalar_one_or_none()

    async def find_by_email(self, email: str) -> User | None:
        """Find user by email - used for authentication. Emails are stored lowercase."""
        result = await self.session.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def exists_by_id(self, id: str) -> bool:
        result = await self.session.execute(select(exists().where(User.id == id)))
        return bool(result.scalar())

    async def insert(self, user: User) -> User:
        """Insert a new row. Raises DuplicateIdentityError if id, name or email is taken."""
        return await self.add(user)

    async def update_fields(self, user: User, **fields: Any) -> User:
        """Assign the given columns and flush. Same duplicate mapping as insert."""
        for column, value in fields.items():
            if not hasattr(User, column):
                raise AttributeError(f"User has no column {column!r}")
            setattr(user, column, value)
        await self.flush()
        return user
