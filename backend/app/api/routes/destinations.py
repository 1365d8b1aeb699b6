"""
Destination routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from app.db.session import get_db
from app.models.user import User
from app.models.destination import Destination
from app.schemas.destination import DestinationCreate, DestinationUpdate, DestinationResponse
from app.api.dependencies import get_current_user
from app.api.routes.trips import list_trip_destinations

router = APIRouter(prefix="/destinations", tags=["destinations"])


@router.post("", response_model=DestinationResponse, status_code=status.HTTP_201_CREATED)
async def create_destination(
    destination_data: DestinationCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a destination for a trip."""
    destination = Destination(**destination_data.model_dump())
    db.add(destination)
    db.commit()
    db.refresh(destination)
    return destination


@router.get("/trip/{trip_id}", response_model=List[DestinationResponse])
async def list_destinations(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List destinations of a trip in creation order."""
    return list_trip_destinations(trip_id, db)


@router.get("/{destination_id}", response_model=DestinationResponse)
async def get_destination(
    destination_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a destination by ID."""
    destination = db.query(Destination).filter(Destination.id == destination_id).first()
    if not destination:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Destination not found"
        )
    return destination


@router.patch("/{destination_id}", response_model=DestinationResponse)
async def update_destination(
    destination_id: int,
    destination_data: DestinationUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update only the supplied destination fields."""
    destination = db.query(Destination).filter(Destination.id == destination_id).first()
    if not destination:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Destination not found"
        )
    
    for field, value in destination_data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(destination, field, value)
    db.commit()
    db.refresh(destination)
    return destination


@router.delete("/{destination_id}")
async def delete_destination(
    destination_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a destination."""
    db.query(Destination).filter(Destination.id == destination_id).delete()
    db.commit()
    return {"message": "Destination deleted successfully"}
