"""
Pydantic schemas for property image responses.
"""

from pydantic import BaseModel, ConfigDict
from datetime import datetime
import uuid


class PropertyImageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    property_id: uuid.UUID
    path: str
    url: str
    created_at: datetime
