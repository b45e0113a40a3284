"""
Icon repository - attachment rows linking a user to a stored blob.
"""

from sqlalchemy import select

from accounts.db.models.icon import IconAttachment
from accounts.db.models.user import User
from accounts.db.repositories.base_repository import BaseRepository


class IconRepository(BaseRepository[IconAttachment]):
    def __init__(self, session):
        super().__init__(session, IconAttachment)

    async def get_for_user(self, user_id: str) -> IconAttachment | None:
        result = await self.session.execute(
            select(IconAttachment).where(IconAttachment.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def attach(
        self, user: User, *, key: str, filename: str, content_type: str, byte_size: int
    ) -> IconAttachment:
        """Replace any existing attachment for the user with one pointing at `key`."""
        current = await self.get_for_user(user.id)
        if current is not None:
            await self.delete(current)
            await self.flush()
        attachment = IconAttachment(
            user_id=user.id,
            key=key,
            filename=filename,
            content_type=content_type,
            byte_size=byte_size,
        )
        return await self.add(attachment)
