"""
Account service - creation, authentication and password changes.
Design: Validation through pydantic schemas, advisory uniqueness checks for
friendly field errors, unique constraints as the final word at insert time.
"""

import logging

from pydantic import ValidationError as SchemaValidationError

from accounts.core.identity import IdentityGenerator
from accounts.core.security import hash_password, needs_rehash, verify_password
from accounts.db.models.user import User
from accounts.db.repositories.user_repository import UserRepository
from accounts.errors import ValidationError
from accounts.schemas.user import PasswordUpdate, UserCreate

logger = logging.getLogger(__name__)

TAKEN = "has already been taken"


class AccountService:
    """Handles user account use cases on one session. Caller commits."""

    def __init__(self, users: UserRepository, identities: IdentityGenerator | None = None):
        self.users = users
        self.identities = identities or IdentityGenerator(users)

    async def create_account(self, name: str, email: str, password: str) -> User:
        """Validate, assign an id, hash the password and insert the row."""
        try:
            data = UserCreate(name=name, email=email, password=password)
        except SchemaValidationError as exc:
            raise ValidationError.from_schema(exc) from exc

        errors: dict[str, list[str]] = {}
        if await self.users.find_by_name(data.name):
            errors["name"] = [TAKEN]
        if await self.users.find_by_email(data.email):
            errors["email"] = [TAKEN]
        if errors:
            raise ValidationError(errors)

        user = User(
            id=await self.identities.new_identity(),
            name=data.name,
            email=data.email,
            password_digest=hash_password(data.password),
        )
        user = await self.users.insert(user)
        logger.info("created account %s (%s)", user.id, user.name)
        return user

    async def authenticate(self, email: str, password: str) -> User | None:
        """Return the user when the password matches, else None."""
        user = await self.users.find_by_email(email)
        if user is None or not verify_password(password, user.password_digest):
            return None
        if needs_rehash(user.password_digest):
            await self.users.update_fields(user, password_digest=hash_password(password))
        return user

    async def update_password(self, user: User, new_password: str) -> User:
        """Re-validate and re-hash. Raises ValidationError on a too-short password."""
        try:
            data = PasswordUpdate(password=new_password)
        except SchemaValidationError as exc:
            raise ValidationError.from_schema(exc) from exc
        return await self.users.update_fields(user, password_digest=hash_password(data.password))
