"""
User model - identity, credentials digest and public profile fields.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import String, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from accounts.db.base import Base

if TYPE_CHECKING:
    from accounts.db.models.icon import IconAttachment


class User(Base):
    """User entity. Name and email are unique at the storage layer, not just in validation."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(30), unique=True, index=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password_digest: Mapped[str] = mapped_column(String(255), nullable=False)
    explanation: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    icon_key: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    icon: Mapped[Optional["IconAttachment"]] = relationship(
        "IconAttachment", back_populates="user", uselist=False, lazy="selectin"
    )

    @validates("email")
    def _lowercase_email(self, key: str, value: str) -> str:
        # Every write path goes through here, so stored emails are always lowercase.
        return value.lower() if value is not None else value

    def __repr__(self) -> str:
        return f"<User(id={self.id}, name={self.name})>"
