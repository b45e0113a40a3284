from accounts.services.account_service import AccountService
from accounts.services.profile_service import ProfileUpdater
from accounts.services.search_service import SearchEngine

__all__ = ["AccountService", "ProfileUpdater", "SearchEngine"]
