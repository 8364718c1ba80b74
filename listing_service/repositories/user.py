"""
User repository for user management with password hashing and email normalization.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from listing_service.repositories.base import BaseRepository
from listing_service.models.user import User
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """
    Repository for users.
    Plain passwords never reach the database; they are hashed here.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def create_user(self, user_data: Dict[str, Any]) -> User:
        """
        Create a new user with email normalization and password hashing.

        Args:
            user_data: Must include username, email, password

        Returns:
            Created user instance

        Raises:
            ValueError: If the email or password is invalid
            IntegrityError: If the email is already registered
        """
        create_data = dict(user_data)
        create_data["email"] = User.validate_email_format(create_data["email"])
        create_data["hashed_password"] = User.hash_password(create_data.pop("password"))

        user = await self.create(create_data)
        logger.info(f"Created user: {user.email} (ID: {user.id})")
        return user

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.

        Args:
            email: Email address, normalized or not
        """
        try:
            normalized = User.validate_email_format(email)
        except ValueError:
            return None
        return await self.get_by_field("email", normalized)

    async def update_user(self, user: User, update_data: Dict[str, Any]) -> User:
        """
        Merge fields into a loaded user and save.
        A new password is hashed and a new email is normalized.

        Raises:
            ValueError: If the email or password is invalid
            IntegrityError: If the new email belongs to another user
        """
        merge_data = dict(update_data)
        if "email" in merge_data:
            merge_data["email"] = User.validate_email_format(merge_data["email"])
        if "password" in merge_data:
            merge_data["hashed_password"] = User.hash_password(merge_data.pop("password"))

        return await self.merge_and_save(user, merge_data)
