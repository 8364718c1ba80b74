"""
Property model for geolocated listings.
Handles property data with location, pricing, ownership and images.
"""

from sqlalchemy import String, Numeric, Index, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from listing_service.database import Base
from decimal import Decimal
import uuid
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from listing_service.models.user import User
    from listing_service.models.image import PropertyImage


class Property(Base):
    """
    Property model for listings searchable by proximity.
    """

    __tablename__ = "properties"

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Property listing title"
    )

    address: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Property street address"
    )

    latitude: Mapped[Decimal] = mapped_column(
        Numeric(precision=10, scale=8),
        nullable=False,
        comment="Property latitude coordinate"
    )

    longitude: Mapped[Decimal] = mapped_column(
        Numeric(precision=11, scale=8),
        nullable=False,
        comment="Property longitude coordinate"
    )

    price: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=False,
        comment="Property price in local currency"
    )

    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="ID of the user who registered this property"
    )

    # Relationships
    owner: Mapped["User"] = relationship(
        "User",
        back_populates="properties"
    )

    images: Mapped[List["PropertyImage"]] = relationship(
        "PropertyImage",
        back_populates="property_rel",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="PropertyImage.created_at.asc()"
    )

    def __repr__(self) -> str:
        """String representation of the property."""
        return f"<Property(id={self.id}, title={self.title[:30]}, price={self.price})>"

    def validate_price(self) -> None:
        """
        Validate property price.

        Raises:
            ValueError: If price is invalid
        """
        if self.price < 0:
            raise ValueError("Property price cannot be negative")

        if self.price > Decimal('9999999999.99'):
            raise ValueError("Property price exceeds maximum allowed value")

    def validate_coordinates(self) -> None:
        """
        Validate latitude and longitude coordinates.

        Raises:
            ValueError: If coordinates are invalid
        """
        if not (-90 <= self.latitude <= 90):
            raise ValueError("Latitude must be between -90 and 90 degrees")

        if not (-180 <= self.longitude <= 180):
            raise ValueError("Longitude must be between -180 and 180 degrees")

    def validate_all(self) -> None:
        """
        Run all validation checks on the property.

        Raises:
            ValueError: If any validation fails
        """
        self.validate_price()
        self.validate_coordinates()


# Bounding-box prefilter for proximity search
coordinates_index = Index(
    'idx_properties_coordinates',
    Property.latitude,
    Property.longitude
)
