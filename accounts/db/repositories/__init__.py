# Repository pattern: data access behind narrow, mockable classes

from accounts.db.repositories.icon_repository import IconRepository
from accounts.db.repositories.user_repository import UserRepository

__all__ = ["UserRepository", "IconRepository"]
