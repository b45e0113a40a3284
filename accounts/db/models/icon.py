"""
Icon attachment - record of the blob currently attached to a user as profile icon.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import String, DateTime, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from accounts.db.base import Base

if TYPE_CHECKING:
    from accounts.db.models.user import User


class IconAttachment(Base):
    """One row per user at most. The blob bytes live in the blob store under `key`."""

    __tablename__ = "icon_attachments"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), unique=True, nullable=False, index=True)
    key: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    filename: Mapped[str] = mapped_column(String(255), nullable=False)
    content_type: Mapped[str] = mapped_column(String(100), nullable=False)
    byte_size: Mapped[int] = mapped_column(nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    user: Mapped["User"] = relationship("User", back_populates="icon")

    def __repr__(self) -> str:
        return f"<IconAttachment(user_id={self.user_id}, key={self.key})>"
