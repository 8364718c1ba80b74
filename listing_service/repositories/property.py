"""
Property repository for listings with image loading and coordinate-range queries.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_, or_
from sqlalchemy.orm import selectinload
from listing_service.repositories.base import BaseRepository
from listing_service.models.property import Property
from listing_service.utils.geo import BoundingBox
from typing import Optional, List, Dict, Any
import uuid
import logging

logger = logging.getLogger(__name__)


class PropertyRepository(BaseRepository[Property]):
    """
    Repository for property listings.
    Runs store-level validation before every write.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)

    async def create_property(self, property_data: Dict[str, Any]) -> Property:
        """
        Create a new property with validation.

        Args:
            property_data: Dictionary containing property information

        Returns:
            Created property instance with images loaded

        Raises:
            ValueError: If validation fails
            SQLAlchemyError: If database operation fails
        """
        Property(**property_data).validate_all()

        created_property = await self.create(property_data)
        logger.info(f"Created property: {created_property.title} (ID: {created_property.id})")
        return await self.get_with_images(created_property.id)

    async def get_with_images(self, property_id: uuid.UUID) -> Optional[Property]:
        """
        Get property with its images loaded.

        Returns:
            Property or None if not found
        """
        query = (
            select(Property)
            .options(selectinload(Property.images))
            .where(Property.id == property_id)
            .execution_options(populate_existing=True)
        )

        result = await self.db.execute(query)
        property_obj = result.scalar_one_or_none()

        if property_obj:
            logger.debug(f"Retrieved property with images: {property_id}")

        return property_obj

    async def update_property(self, property_obj: Property, update_data: Dict[str, Any]) -> Property:
        """
        Merge fields into a loaded property, validate, and save.

        Raises:
            ValueError: If the merged property fails validation
            SQLAlchemyError: If database operation fails
        """
        candidate = Property(
            title=property_obj.title,
            address=property_obj.address,
            latitude=property_obj.latitude,
            longitude=property_obj.longitude,
            price=property_obj.price,
        )
        for field, value in update_data.items():
            setattr(candidate, field, value)
        candidate.validate_all()

        await self.merge_and_save(property_obj, update_data)
        return await self.get_with_images(property_obj.id)

    async def get_within_bounds(self, box: BoundingBox) -> List[Property]:
        """
        Get properties whose coordinates fall inside a bounding box.

        Args:
            box: Latitude/longitude box; may cross the antimeridian

        Returns:
            Properties with images loaded
        """
        if box.crosses_antimeridian:
            longitude_condition = or_(
                Property.longitude >= box.min_longitude,
                Property.longitude <= box.max_longitude
            )
        else:
            longitude_condition = Property.longitude.between(box.min_longitude, box.max_longitude)

        query = (
            select(Property)
            .options(selectinload(Property.images))
            .where(
                and_(
                    Property.latitude.between(box.min_latitude, box.max_latitude),
                    longitude_condition
                )
            )
            .execution_options(populate_existing=True)
        )

        result = await self.db.execute(query)
        properties = list(result.scalars().all())

        logger.debug(f"Found {len(properties)} properties inside {box}")
        return properties
