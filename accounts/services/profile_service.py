"""
Profile updates - explanation text and icon attachment in one transaction.
Design: The field write, the attachment row and the icon_key pointer commit
together or not at all. Callers get a TransactionResult, never the exception;
the cause is logged and kept on the result. Blobs are a separate system, so a
blob written for a rolled-back update is deleted again afterwards.
"""

import logging

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from accounts.config import Settings, get_settings
from accounts.db.models.user import User
from accounts.db.repositories.icon_repository import IconRepository
from accounts.db.repositories.user_repository import UserRepository
from accounts.db.session import TransactionResult, get_session_maker, run_in_transaction
from accounts.errors import AttachmentError, StoreError, ValidationError
from accounts.schemas.icon import IconUpload
from accounts.schemas.user import ProfileUpdate
from accounts.storage.blob_store import BlobStore, get_blob_store

logger = logging.getLogger(__name__)


class ProfileUpdater:
    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession] | None = None,
        blob_store: BlobStore | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or get_settings()
        self.session_maker = session_maker or get_session_maker()
        self.blob_store = blob_store or get_blob_store(self.settings)

    def check_icon(self, icon: IconUpload) -> None:
        """Raise AttachmentError unless the icon is an allowed image type within the size limit."""
        if icon.content_type not in self.settings.icon_content_types:
            raise AttachmentError(f"icon type {icon.content_type!r} is not allowed")
        if icon.byte_size == 0:
            raise AttachmentError("icon is empty")
        if icon.byte_size > self.settings.max_icon_bytes:
            raise AttachmentError(
                f"icon is {icon.byte_size} bytes, limit is {self.settings.max_icon_size_mb}MB"
            )

    async def update_profile(
        self,
        user: User,
        explanation: str | None = None,
        icon: IconUpload | None = None,
    ) -> TransactionResult:
        """Update explanation and/or icon atomically. Reload `user` to see the new values."""
        written: list[str] = []
        replaced: list[str] = []

        async def work(session: AsyncSession) -> None:
            users = UserRepository(session)
            record = await users.find_by_id(user.id)
            if record is None:
                raise StoreError(f"user {user.id} does not exist")

            if explanation is not None:
                try:
                    ProfileUpdate(explanation=explanation)
                except SchemaValidationError as exc:
                    raise ValidationError.from_schema(exc) from exc
                await users.update_fields(record, explanation=explanation)

            if icon is not None:
                self.check_icon(icon)
                key = await self.blob_store.store(icon.content, icon.content_type, icon.filename)
                written.append(key)
                icons = IconRepository(session)
                previous = await icons.get_for_user(record.id)
                if previous is not None:
                    replaced.append(previous.key)
                try:
                    await icons.attach(
                        record,
                        key=key,
                        filename=icon.filename,
                        content_type=icon.content_type,
                        byte_size=icon.byte_size,
                    )
                except Exception as exc:
                    raise AttachmentError(f"icon is invalid: {exc}") from exc
                await users.update_fields(record, icon_key=key)

        result = await run_in_transaction(self.session_maker, work)
        # Whichever side lost, its blobs are no longer referenced.
        await self._discard(replaced if result else written)
        return result

    async def _discard(self, keys: list[str]) -> None:
        for key in keys:
            try:
                await self.blob_store.delete(key)
            except StoreError as exc:
                logger.warning("could not delete orphaned icon blob %s: %s", key, exc)
