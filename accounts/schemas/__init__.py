from accounts.schemas.icon import IconUpload
from accounts.schemas.user import (
    PasswordUpdate,
    ProfileUpdate,
    SearchResult,
    UserCreate,
    UserResponse,
)

__all__ = [
    "IconUpload",
    "PasswordUpdate",
    "ProfileUpdate",
    "SearchResult",
    "UserCreate",
    "UserResponse",
]
