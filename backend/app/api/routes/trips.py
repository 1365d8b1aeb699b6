"""
Trip management routes.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import or_
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date
from app.db.session import get_db
from app.models.user import User
from app.models.trip import Trip
from app.models.destination import Destination
from app.models.itinerary import ItineraryItem
from app.models.expense import Expense
from app.schemas.trip import (
    TripCreate, TripUpdate, TripResponse, CollaboratorAdd,
    TripTypeResponse, TripSummaryResponse, WeatherSuggestionResponse
)
from app.services import suggestion_service
from app.api.dependencies import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trips", tags=["trips"])


def get_trip_or_404(trip_id: int, db: Session) -> Trip:
    """Load a trip or raise 404."""
    trip = db.query(Trip).filter(Trip.id == trip_id).first()
    if not trip:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Trip not found"
        )
    return trip


def list_trip_destinations(trip_id: int, db: Session) -> List[Destination]:
    return db.query(Destination).filter(
        Destination.trip_id == trip_id
    ).order_by(Destination.id.asc()).all()


@router.post("", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Create a new trip owned by the current user.
    
    When a destination name is given, a first destination is created after the
    trip is committed, spanning the trip dates. The two writes are separate:
    if the second fails the trip stays without its destination.
    """
    new_trip = Trip(
        name=trip_data.name,
        owner_id=current_user.id,
        start_date=trip_data.start_date,
        end_date=trip_data.end_date,
        description=trip_data.description,
        keywords=trip_data.keywords
    )
    db.add(new_trip)
    db.commit()
    db.refresh(new_trip)
    
    if trip_data.destination and trip_data.destination.strip():
        today = date.today().isoformat()
        name = trip_data.destination.strip()
        destination = Destination(
            trip_id=new_trip.id,
            name=name,
            location=name,
            arrival_date=trip_data.start_date or today,
            departure_date=trip_data.end_date or today,
            notes=""
        )
        db.add(destination)
        db.commit()
    
    logger.info(f"User {current_user.id} created trip {new_trip.id}")
    return new_trip


@router.get("", response_model=List[TripResponse])
async def list_trips(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List trips the current user owns or collaborates on."""
    trips = db.query(Trip).filter(
        or_(
            Trip.owner_id == current_user.id,
            Trip.collaborators.any(User.id == current_user.id)
        )
    ).order_by(Trip.id.asc()).all()
    return trips


@router.get("/{trip_id}", response_model=TripResponse)
async def get_trip(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get trip details."""
    return get_trip_or_404(trip_id, db)


@router.patch("/{trip_id}", response_model=TripResponse)
async def update_trip(
    trip_id: int,
    trip_data: TripUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update only the supplied trip fields."""
    trip = get_trip_or_404(trip_id, db)
    for field, value in trip_data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(trip, field, value)
    db.commit()
    db.refresh(trip)
    return trip


@router.delete("/{trip_id}")
async def delete_trip(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Delete a trip.
    
    Destinations, itinerary items, expenses, notes and reminders of the trip
    are left in place. Deleting a missing trip is not an error.
    """
    trip = db.query(Trip).filter(Trip.id == trip_id).first()
    if trip:
        db.delete(trip)
        db.commit()
    return {"message": "Trip deleted successfully"}


@router.post("/{trip_id}/collaborators", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def add_collaborator(
    trip_id: int,
    collaborator: CollaboratorAdd,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add a collaborator to the trip."""
    trip = get_trip_or_404(trip_id, db)
    
    user = db.query(User).filter(User.id == collaborator.user_id).first()
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    
    if user.id not in trip.collaborator_ids:
        trip.collaborators.append(user)
        db.commit()
        db.refresh(trip)
    
    return trip


@router.delete("/{trip_id}/collaborators/{user_id}", response_model=TripResponse)
async def remove_collaborator(
    trip_id: int,
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Remove a collaborator from the trip."""
    trip = get_trip_or_404(trip_id, db)
    
    trip.collaborators = [user for user in trip.collaborators if user.id != user_id]
    db.commit()
    db.refresh(trip)
    
    return trip


@router.get("/{trip_id}/trip-type", response_model=TripTypeResponse)
async def detect_trip_type(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Guess the kind of trip from its text and destinations."""
    trip = get_trip_or_404(trip_id, db)
    destinations = list_trip_destinations(trip_id, db)
    return suggestion_service.detect_trip_type(trip, destinations)


@router.get("/{trip_id}/summary", response_model=TripSummaryResponse)
async def get_trip_summary(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Markdown overview of the trip."""
    trip = get_trip_or_404(trip_id, db)
    destinations = list_trip_destinations(trip_id, db)
    items = db.query(ItineraryItem).filter(ItineraryItem.trip_id == trip_id).all()
    expenses = db.query(Expense).filter(Expense.trip_id == trip_id).all()
    
    return TripSummaryResponse(
        trip_id=trip.id,
        summary=suggestion_service.trip_summary(trip, destinations, items, expenses)
    )


@router.get("/{trip_id}/weather", response_model=WeatherSuggestionResponse)
async def get_weather_suggestions(
    trip_id: int,
    location: Optional[str] = Query(None, description="Defaults to the first destination"),
    on: Optional[str] = Query(None, description="ISO date, defaults to the trip start"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Weather-aware packing suggestions for a trip destination."""
    trip = get_trip_or_404(trip_id, db)
    
    if not location:
        destinations = list_trip_destinations(trip_id, db)
        if not destinations:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Trip has no destinations"
            )
        location = destinations[0].location
    
    try:
        season, suggestions = suggestion_service.weather_suggestions(location, on or trip.start_date)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid date"
        )
    
    return WeatherSuggestionResponse(location=location, season=season, suggestions=suggestions)
