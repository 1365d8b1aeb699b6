"""
Pydantic schemas for ItineraryItem entity and itinerary suggestions.
"""
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class ItineraryItemBase(BaseModel):
    """Base itinerary item schema."""
    date: str
    time: Optional[str] = None
    title: str
    description: Optional[str] = None
    location: Optional[str] = None


class ItineraryItemCreate(ItineraryItemBase):
    """Schema for itinerary item creation."""
    trip_id: int


class ItineraryItemUpdate(BaseModel):
    """Schema for itinerary item update. Only supplied fields are patched."""
    date: Optional[str] = None
    time: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    order: Optional[float] = None  # Position in the drag-and-drop list


class ItineraryItemResponse(ItineraryItemBase):
    """Schema for itinerary item response."""
    id: int
    trip_id: int
    order: Optional[float] = None
    created_at: datetime
    
    class Config:
        from_attributes = True


class RuleBasedSuggestionResponse(BaseModel):
    """One suggestion line per trip day."""
    trip_id: int
    trip_type: str
    season: str
    lines: List[str]


class TemplateSuggestionResponse(BaseModel):
    """Markdown itinerary built from activity templates."""
    trip_id: int
    itinerary: str


class ApplySuggestionRequest(BaseModel):
    """Generated itinerary text to turn into items and a travel-tips note."""
    text: str
    date: Optional[str] = None  # Defaults to the trip's start date


class ApplySuggestionResponse(BaseModel):
    """Result of applying a generated itinerary."""
    items: List[ItineraryItemResponse]
    tips_note_id: Optional[int] = None
