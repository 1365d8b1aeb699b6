"""
Pydantic schemas for Trip entity.
"""
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class TripBase(BaseModel):
    """Base trip schema."""
    name: str
    start_date: str  # ISO date
    end_date: str  # ISO date
    description: Optional[str] = None
    keywords: Optional[str] = None


class TripCreate(TripBase):
    """Schema for trip creation."""
    destination: Optional[str] = None  # Seeds a first destination when given


class TripUpdate(BaseModel):
    """Schema for trip update. Only supplied fields are patched."""
    name: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    description: Optional[str] = None
    keywords: Optional[str] = None


class TripResponse(TripBase):
    """Schema for trip response."""
    id: int
    owner_id: int
    collaborator_ids: List[int] = []
    created_at: datetime
    updated_at: datetime
    
    class Config:
        from_attributes = True


class CollaboratorAdd(BaseModel):
    """Schema for adding a collaborator by local user id."""
    user_id: int


class TripTypeResponse(BaseModel):
    """Detected trip type."""
    type: str
    confidence: int  # Percentage, 30 to 95
    suggestions: List[str]


class TripSummaryResponse(BaseModel):
    """Generated markdown overview of a trip."""
    trip_id: int
    summary: str


class WeatherSuggestionResponse(BaseModel):
    """Packing and activity suggestions for a location and date."""
    location: str
    season: str
    suggestions: List[str]
