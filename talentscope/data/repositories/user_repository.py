"""
User repository for TalentScope.

Reads the organization directory the reporting tree is built from.
"""

from typing import Optional

from talentscope.data.models.user import User
from talentscope.utils.config import get_settings
from talentscope.utils.logger import get_logger

from .base import BaseRepository

logger = get_logger(__name__)

# Only what the hierarchy and report rows need
USER_PROJECTION = {
    "name": 1,
    "email": 1,
    "designation": 1,
    "reporter": 1,
    "isAdmin": 1,
    "department": 1,
    "createdAt": 1,
}


class UserRepository(BaseRepository[User]):
    """Repository for user document queries."""

    @property
    def collection_name(self) -> str:
        return get_settings().database.users_collection

    @property
    def model_class(self) -> type[User]:
        return User

    def get_directory(self) -> list[User]:
        """Load every user without credentials or profile data."""
        users = self.find_all(projection=USER_PROJECTION)
        logger.debug(f"Loaded {len(users)} users")
        return users


# Singleton instance
_user_repository: Optional[UserRepository] = None


def get_user_repository() -> UserRepository:
    """Get the user repository singleton instance."""
    global _user_repository
    if _user_repository is None:
        _user_repository = UserRepository()
    return _user_repository
