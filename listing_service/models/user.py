"""
User model with credential hashing and email normalization.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from listing_service.database import Base
from listing_service.config import get_settings
from passlib.context import CryptContext
from email_validator import validate_email, EmailNotValidError
from functools import lru_cache
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from listing_service.models.property import Property


@lru_cache()
def get_pwd_context() -> CryptContext:
    """Password hashing context using the configured bcrypt cost."""
    return CryptContext(
        schemes=["bcrypt"],
        deprecated="auto",
        bcrypt__rounds=get_settings().password_hash_rounds
    )


class User(Base):
    """
    User model for property owners.
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(
        String(80),
        nullable=False,
        comment="Display name chosen by the user"
    )

    email: Mapped[str] = mapped_column(
        String(254),
        unique=True,
        nullable=False,
        index=True,
        comment="User email address - must be unique and valid"
    )

    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )

    # Deleting a user removes the properties they own
    properties: Mapped[List["Property"]] = relationship(
        "Property",
        back_populates="owner",
        cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        """String representation of the user."""
        return f"<User(id={self.id}, email={self.email})>"

    @classmethod
    def validate_email_format(cls, email: str) -> str:
        """
        Validate email format using email-validator.

        Args:
            email: Email address to validate

        Returns:
            Normalized email address

        Raises:
            ValueError: If email format is invalid
        """
        try:
            valid_email = validate_email(email, check_deliverability=False)
            return valid_email.normalized.lower()
        except EmailNotValidError as e:
            raise ValueError(f"Invalid email format: {str(e)}")

    @classmethod
    def hash_password(cls, password: str) -> str:
        """
        Hash a password using bcrypt.

        Raises:
            ValueError: If the password is empty
        """
        if not password:
            raise ValueError("Password cannot be empty")

        return get_pwd_context().hash(password)

    def verify_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""
        return get_pwd_context().verify(password, self.hashed_password)

    def set_password(self, password: str) -> None:
        self.hashed_password = self.hash_password(password)
