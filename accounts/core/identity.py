"""
Identity assignment: random uuid candidates checked against stored users.
The existence check is optimistic; the primary-key constraint is the real guard.
"""

import logging
import uuid
from collections.abc import Callable

from accounts.config import get_settings
from accounts.db.repositories.user_repository import UserRepository
from accounts.errors import IdentitySpaceExhausted

logger = logging.getLogger(__name__)


class IdentityGenerator:
    def __init__(
        self,
        users: UserRepository,
        retry_budget: int | None = None,
        factory: Callable[[], uuid.UUID] = uuid.uuid4,
    ):
        self.users = users
        self.retry_budget = retry_budget or get_settings().identity_retry_budget
        self.factory = factory

    async def new_identity(self) -> str:
        """Return an id no stored user has. Raises IdentitySpaceExhausted past the budget."""
        for attempt in range(1, self.retry_budget + 1):
            candidate = str(self.factory())
            if not await self.users.exists_by_id(candidate):
                return candidate
            logger.warning("identity collision on attempt %d: %s", attempt, candidate)
        raise IdentitySpaceExhausted(self.retry_budget)
