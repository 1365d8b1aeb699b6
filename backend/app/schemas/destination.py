"""
Pydantic schemas for Destination entity.
"""
from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class DestinationBase(BaseModel):
    """Base destination schema."""
    name: str
    location: str
    arrival_date: str
    departure_date: str
    notes: Optional[str] = None


class DestinationCreate(DestinationBase):
    """Schema for destination creation."""
    trip_id: int


class DestinationUpdate(BaseModel):
    """Schema for destination update. Only supplied fields are patched."""
    name: Optional[str] = None
    location: Optional[str] = None
    arrival_date: Optional[str] = None
    departure_date: Optional[str] = None
    notes: Optional[str] = None


class DestinationResponse(DestinationBase):
    """Schema for destination response."""
    id: int
    trip_id: int
    created_at: datetime
    
    class Config:
        from_attributes = True
