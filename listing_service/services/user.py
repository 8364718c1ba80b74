"""
User service for registering and managing users.
Email uniqueness is pre-checked here and enforced by the store's unique constraint.
"""

from typing import Any, List, Mapping, Union
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from pydantic import ValidationError as PydanticValidationError
from listing_service.repositories.user import UserRepository
from listing_service.models.user import User
from listing_service.schemas.user import UserCreate, UserUpdate, MessageResponse
from listing_service.utils.messages import get_message
from listing_service.utils.validators import parse_uuid, handle_pydantic_validation_error
from listing_service.utils.exceptions import (
    NotFoundError,
    DuplicateEmailError,
    ValidationError,
    QueryError,
    PersistenceError
)
import uuid
import logging

logger = logging.getLogger(__name__)

UserFields = Union[Mapping[str, Any], UserCreate, UserUpdate]


class UserService:
    """
    User service with an explicit repository.
    """

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    @classmethod
    def from_session(cls, db_session: AsyncSession) -> "UserService":
        return cls(UserRepository(db_session))

    async def list_users(self) -> List[User]:
        """
        List every user.

        Raises:
            QueryError: If the query fails in the store
        """
        try:
            users = await self.user_repo.get_all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list users: {e}")
            raise QueryError("user.list") from e

        logger.debug(f"Listed {len(users)} users")
        return users

    async def create_user(self, fields: UserFields) -> User:
        """
        Register a user unless the email is already taken.

        Raises:
            ValidationError: If a field is missing or the email is malformed
            DuplicateEmailError: If another user has the email; nothing is created
            PersistenceError: If the store rejects the write
        """
        try:
            user_data = UserCreate.model_validate(fields)
        except PydanticValidationError as e:
            raise handle_pydantic_validation_error("user.create", e) from e

        try:
            email = User.validate_email_format(user_data.email)
        except ValueError as e:
            raise ValidationError("user.create", field_errors=[
                {"field": "email", "message": str(e), "type": "email"}
            ]) from e

        try:
            existing_user = await self.user_repo.get_by_email(email)
        except SQLAlchemyError as e:
            logger.error(f"Failed to check email {email}: {e}")
            raise PersistenceError("user.create") from e

        if existing_user:
            logger.info(f"Registration rejected, email already in use: {email}")
            raise DuplicateEmailError("user.create.duplicate", email)

        try:
            user = await self.user_repo.create_user(user_data.model_dump())
        except IntegrityError as e:
            # Lost a race with a concurrent registration of the same email
            logger.info(f"Registration rejected by unique constraint: {email}")
            raise DuplicateEmailError("user.create.duplicate", email) from e
        except ValueError as e:
            raise ValidationError("user.create", field_errors=[{"message": str(e)}]) from e
        except SQLAlchemyError as e:
            logger.error(f"Failed to create user {email}: {e}")
            raise PersistenceError("user.create") from e

        return user

    async def get_user(self, user_id: Union[uuid.UUID, str]) -> User:
        """
        Get a user by id.

        Raises:
            NotFoundError: If user doesn't exist
            QueryError: If the lookup fails in the store
        """
        return await self._load(user_id, "user.show", QueryError)

    async def update_user(self, user_id: Union[uuid.UUID, str], fields: UserFields) -> User:
        """
        Merge the supplied fields into a user and save it.

        Raises:
            NotFoundError: If user doesn't exist
            ValidationError: If a field is invalid
            DuplicateEmailError: If the new email belongs to another user
            PersistenceError: If the store rejects the write
        """
        user = await self._load(user_id, "user.update", PersistenceError)

        if isinstance(fields, UserCreate):
            fields = fields.model_dump()
        try:
            user_data = UserUpdate.model_validate(fields)
        except PydanticValidationError as e:
            raise handle_pydantic_validation_error("user.update", e) from e

        update_data = user_data.model_dump(exclude_unset=True, exclude_none=True)
        if not update_data:
            return user

        record_id = user.id
        if "email" in update_data:
            try:
                email = User.validate_email_format(update_data["email"])
            except ValueError as e:
                raise ValidationError("user.update", field_errors=[
                    {"field": "email", "message": str(e), "type": "email"}
                ]) from e

            try:
                holder = await self.user_repo.get_by_email(email)
            except SQLAlchemyError as e:
                logger.error(f"Failed to check email {email}: {e}")
                raise PersistenceError("user.update") from e

            if holder is not None and holder.id != record_id:
                raise DuplicateEmailError("user.update.duplicate", email)

        try:
            updated_user = await self.user_repo.update_user(user, update_data)
        except IntegrityError as e:
            logger.info(f"Update of user {record_id} rejected by unique constraint")
            raise DuplicateEmailError("user.update.duplicate", update_data.get("email")) from e
        except ValueError as e:
            raise ValidationError("user.update", field_errors=[{"message": str(e)}]) from e
        except SQLAlchemyError as e:
            logger.error(f"Failed to update user {record_id}: {e}")
            raise PersistenceError("user.update") from e

        logger.info(f"User updated: {record_id} ({', '.join(sorted(update_data))})")
        return updated_user

    async def delete_user(self, user_id: Union[uuid.UUID, str]) -> MessageResponse:
        """
        Delete a user and the properties they own.
        No ownership check is made; any caller may delete any user.

        Raises:
            NotFoundError: If user doesn't exist
            PersistenceError: If the store rejects the delete
        """
        user = await self._load(user_id, "user.delete", PersistenceError)

        record_id = user.id
        try:
            await self.user_repo.remove(user)
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete user {record_id}: {e}")
            raise PersistenceError("user.delete") from e

        logger.info(f"User deleted: {record_id}")
        return MessageResponse(message=get_message("user.deleted"))

    async def _load(self, user_id: Any, operation: str, fault: type) -> User:
        record_id = parse_uuid(user_id)
        if record_id is None:
            raise NotFoundError(operation, user_id)

        try:
            user = await self.user_repo.get_by_id(record_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load user {record_id}: {e}")
            raise fault(operation) from e

        if user is None:
            raise NotFoundError(operation, record_id)
        return user
