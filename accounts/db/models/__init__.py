from accounts.db.models.icon import IconAttachment
from accounts.db.models.user import User

__all__ = ["User", "IconAttachment"]
