"""
Property service for geolocated listings.
Handles CRUD operations, ownership checks on delete, and proximity search.
"""

from typing import Any, List, Mapping, Optional, Union
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from pydantic import ValidationError as PydanticValidationError
from listing_service.config import Settings, get_settings
from listing_service.repositories.property import PropertyRepository
from listing_service.models.property import Property
from listing_service.schemas.property import PropertyCreate, PropertyUpdate, NearbyQuery
from listing_service.schemas.user import MessageResponse
from listing_service.utils.geo import GeoSearch
from listing_service.utils.messages import get_message
from listing_service.utils.validators import parse_uuid, handle_pydantic_validation_error
from listing_service.utils.exceptions import (
    NotFoundError,
    UnauthorizedError,
    ValidationError,
    QueryError,
    PersistenceError
)
import uuid
import logging

logger = logging.getLogger(__name__)

PropertyFields = Union[Mapping[str, Any], PropertyCreate, PropertyUpdate]


class PropertyService:
    """
    Property service with explicit collaborators.

    Every operation either returns its result or raises one of the errors in
    listing_service.utils.exceptions; store faults are logged and converted.
    """

    def __init__(
        self,
        property_repo: PropertyRepository,
        geo_search: GeoSearch,
        settings: Optional[Settings] = None
    ):
        self.property_repo = property_repo
        self.geo_search = geo_search
        self.settings = settings or get_settings()

    @classmethod
    def from_session(cls, db_session: AsyncSession, settings: Optional[Settings] = None) -> "PropertyService":
        """Build a service wired to the default repository and geo search."""
        property_repo = PropertyRepository(db_session)
        return cls(property_repo, GeoSearch(property_repo), settings)

    async def list_properties(self, latitude: Any, longitude: Any) -> List[Property]:
        """
        List properties near a point, images attached, nearest first.

        Args:
            latitude: Reference latitude; numeric strings are accepted
            longitude: Reference longitude; numeric strings are accepted

        Raises:
            ValidationError: If a coordinate is missing or out of range
            QueryError: If the search fails in the store
        """
        try:
            point = NearbyQuery(latitude=latitude, longitude=longitude)
        except PydanticValidationError as e:
            raise handle_pydantic_validation_error("property.list.coordinates", e) from e

        radius_km = self.settings.nearby_radius_km
        try:
            properties = await self.geo_search.near_by(point.latitude, point.longitude, radius_km)
        except SQLAlchemyError as e:
            logger.error(f"Failed to list properties near ({point.latitude}, {point.longitude}): {e}")
            raise QueryError("property.list") from e

        logger.debug(f"Found {len(properties)} properties within {radius_km}km of ({point.latitude}, {point.longitude})")
        return properties

    async def create_property(self, actor_id: Union[uuid.UUID, str], fields: PropertyFields) -> Property:
        """
        Register a property owned by the actor.
        Any owner supplied in fields is ignored.

        Raises:
            ValidationError: If a field is missing or fails store validation
            PersistenceError: If the store rejects the write
        """
        owner_id = parse_uuid(actor_id)
        if owner_id is None:
            raise ValidationError("property.create", field_errors=[
                {"field": "owner_id", "message": "Invalid actor id", "type": "uuid_parsing"}
            ])

        try:
            property_data = PropertyCreate.model_validate(fields)
        except PydanticValidationError as e:
            raise handle_pydantic_validation_error("property.create", e) from e

        create_data = property_data.model_dump()
        create_data["owner_id"] = owner_id

        try:
            property_obj = await self.property_repo.create_property(create_data)
        except ValueError as e:
            logger.warning(f"Property validation failed for user {owner_id}: {e}")
            raise ValidationError("property.create", field_errors=[{"message": str(e)}]) from e
        except SQLAlchemyError as e:
            logger.error(f"Failed to create property for user {owner_id}: {e}")
            raise PersistenceError("property.create") from e

        logger.info(f"Property created by user {owner_id}: {property_obj.title} (ID: {property_obj.id})")
        return property_obj

    async def get_property(self, property_id: Union[uuid.UUID, str]) -> Property:
        """
        Get a property with its images.

        Raises:
            NotFoundError: If property doesn't exist
            QueryError: If the lookup fails in the store
        """
        property_obj = await self._load(property_id, "property.show", QueryError)
        logger.debug(f"Retrieved property: {property_obj.id}")
        return property_obj

    async def update_property(self, property_id: Union[uuid.UUID, str], fields: PropertyFields) -> Property:
        """
        Merge the supplied fields into a property and save it.
        The owner never changes.

        Raises:
            NotFoundError: If property doesn't exist
            ValidationError: If the merged property fails store validation
            PersistenceError: If the store rejects the write
        """
        property_obj = await self._load(property_id, "property.update", PersistenceError)

        if isinstance(fields, PropertyCreate):
            fields = fields.model_dump()
        try:
            property_data = PropertyUpdate.model_validate(fields)
        except PydanticValidationError as e:
            raise handle_pydantic_validation_error("property.update", e) from e

        update_data = property_data.model_dump(exclude_unset=True, exclude_none=True)
        if not update_data:
            logger.debug(f"No fields supplied for property {property_obj.id}")
            return property_obj

        record_id = property_obj.id
        try:
            updated_property = await self.property_repo.update_property(property_obj, update_data)
        except ValueError as e:
            logger.warning(f"Property validation failed for {record_id}: {e}")
            raise ValidationError("property.update", field_errors=[{"message": str(e)}]) from e
        except SQLAlchemyError as e:
            logger.error(f"Failed to update property {record_id}: {e}")
            raise PersistenceError("property.update") from e

        logger.info(f"Property updated: {record_id} ({', '.join(sorted(update_data))})")
        return updated_property

    async def delete_property(
        self,
        actor_id: Union[uuid.UUID, str],
        property_id: Union[uuid.UUID, str]
    ) -> MessageResponse:
        """
        Delete a property on behalf of its owner.

        Raises:
            NotFoundError: If property doesn't exist
            UnauthorizedError: If the actor is not the owner; nothing is deleted
            PersistenceError: If the store rejects the delete
        """
        property_obj = await self._load(property_id, "property.delete", PersistenceError)

        if parse_uuid(actor_id) != property_obj.owner_id:
            logger.warning(f"User {actor_id} tried to delete property {property_obj.id} owned by {property_obj.owner_id}")
            raise UnauthorizedError("property.delete.unauthorized")

        record_id = property_obj.id
        try:
            await self.property_repo.remove(property_obj)
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete property {record_id}: {e}")
            raise PersistenceError("property.delete") from e

        logger.info(f"Property deleted by user {actor_id}: {record_id}")
        return MessageResponse(message=get_message("property.deleted"))

    async def _load(self, property_id: Any, operation: str, fault: type) -> Property:
        """Load a property with images or raise NotFoundError for the operation."""
        record_id = parse_uuid(property_id)
        if record_id is None:
            raise NotFoundError(operation, property_id)

        try:
            property_obj = await self.property_repo.get_with_images(record_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load property {record_id}: {e}")
            raise fault(operation) from e

        if property_obj is None:
            raise NotFoundError(operation, record_id)
        return property_obj
