"""
Pydantic schemas for property requests and responses.
Input schemas keep only the fields a caller may set; anything else is dropped.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime
from decimal import Decimal
import uuid
from listing_service.schemas.image import PropertyImageResponse


class PropertyCreate(BaseModel):
    """Fields accepted when registering a property."""

    model_config = ConfigDict(extra="ignore")

    title: str = Field(..., description="Property listing title", examples=["Casa na praia"])
    address: str = Field(..., description="Property street address", examples=["Rua das Flores, 100"])
    latitude: Decimal = Field(..., description="Latitude in decimal degrees", examples=[-27.5969])
    longitude: Decimal = Field(..., description="Longitude in decimal degrees", examples=[-48.5495])
    price: Decimal = Field(..., description="Property price", examples=[350000])


class PropertyUpdate(BaseModel):
    """Partial update; unset and null fields are left untouched."""

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    address: Optional[str] = None
    latitude: Optional[Decimal] = None
    longitude: Optional[Decimal] = None
    price: Optional[Decimal] = None


class NearbyQuery(BaseModel):
    """Reference point of a proximity search."""

    latitude: Decimal = Field(..., ge=-90, le=90)
    longitude: Decimal = Field(..., ge=-180, le=180)


class PropertyResponse(BaseModel):
    """Property as returned to callers, images attached."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    address: str
    latitude: Decimal
    longitude: Decimal
    price: Decimal
    owner_id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    images: List[PropertyImageResponse] = []
