"""
PropertyImage model for pictures attached to a property.
Images are stored elsewhere; this table keeps the stored file name.
"""

from sqlalchemy import String, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from listing_service.database import Base
from listing_service.config import get_settings
import uuid
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from listing_service.models.property import Property


class PropertyImage(Base):
    """
    PropertyImage model owned by a Property.
    """

    __tablename__ = "property_images"

    property_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="ID of the property this image belongs to"
    )

    path: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        unique=True,
        comment="Stored file name of the image"
    )

    property_rel: Mapped["Property"] = relationship(
        "Property",
        back_populates="images"
    )

    def __repr__(self) -> str:
        """String representation of the property image."""
        return f"<PropertyImage(id={self.id}, property_id={self.property_id}, path={self.path})>"

    @property
    def url(self) -> str:
        """Public URL of the image."""
        return f"{get_settings().app_url.rstrip('/')}/images/{self.path}"
