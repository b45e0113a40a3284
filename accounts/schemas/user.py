"""User input/output schemas - validation rules and public projections."""

import re
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from accounts.db.models.user import User

NAME_PATTERN = r"^[a-zA-Z0-9-]+$"
EMAIL_REGEX = re.compile(r"\A[\w+\-.]+@[a-z\d\-]+(\.[a-z\d\-]+)*\.[a-z]+\Z", re.IGNORECASE)
PASSWORD_MIN_LENGTH = 6


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=30, pattern=NAME_PATTERN)
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)

    @field_validator("email")
    @classmethod
    def email_shape(cls, value: str) -> str:
        if not EMAIL_REGEX.match(value):
            raise ValueError("is invalid")
        return value.lower()


class PasswordUpdate(BaseModel):
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)


class ProfileUpdate(BaseModel):
    explanation: Optional[str] = Field(None, max_length=255)


class UserResponse(BaseModel):
    """Public view of a user. Never carries email or password digest."""

    uuid: str
    name: str
    explanation: str = ""
    icon: str = ""

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            uuid=user.id,
            name=user.name,
            explanation=user.explanation or "",
            icon=user.icon_key or "",
        )


class SearchResult(BaseModel):
    """One ranked search hit: the public-safe columns of a user."""

    name: str
    icon_key: Optional[str] = None
    explanation: Optional[str] = None
    id: str

    model_config = {"from_attributes": True}
