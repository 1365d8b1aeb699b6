"""
Itinerary routes: item CRUD, batched reordering and generated suggestions.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func
from sqlalchemy.orm import Session
from typing import List, Optional
from app.db.session import get_db
from app.models.user import User
from app.models.itinerary import ItineraryItem
from app.models.note import Note
from app.schemas.itinerary import (
    ItineraryItemCreate, ItineraryItemUpdate, ItineraryItemResponse,
    RuleBasedSuggestionResponse, TemplateSuggestionResponse,
    ApplySuggestionRequest, ApplySuggestionResponse
)
from app.services import reorder_service, suggestion_service
from app.api.dependencies import get_current_user
from app.api.routes.trips import get_trip_or_404, list_trip_destinations
from app.core.utils import utc_now_iso

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/itinerary", tags=["itinerary"])


def ordered_items_query(db: Session, trip_id: int):
    """Items of a trip in display order. Items without an order sort first."""
    return db.query(ItineraryItem).filter(
        ItineraryItem.trip_id == trip_id
    ).order_by(func.coalesce(ItineraryItem.order, 0).asc(), ItineraryItem.id.asc())


@router.post("", response_model=ItineraryItemResponse, status_code=status.HTTP_201_CREATED)
async def create_item(
    item_data: ItineraryItemCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create an itinerary item. New items carry no order."""
    item = ItineraryItem(**item_data.model_dump())
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


@router.get("/trip/{trip_id}", response_model=List[ItineraryItemResponse])
async def list_items(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List itinerary items of a trip in display order."""
    return ordered_items_query(db, trip_id).all()


@router.get("/trip/{trip_id}/date/{item_date}", response_model=List[ItineraryItemResponse])
async def list_items_by_date(
    trip_id: int,
    item_date: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List itinerary items of a trip on one date."""
    return ordered_items_query(db, trip_id).filter(ItineraryItem.date == item_date).all()


@router.put("/trip/{trip_id}/reorder", response_model=List[ItineraryItemResponse])
async def reorder_items(
    trip_id: int,
    item_ids: List[int],  # Ordered list of all item IDs of the trip
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Reorder all items of a trip in one transaction.
    The item_ids list should contain every item ID of the trip in the desired order.
    """
    try:
        return reorder_service.apply_order(trip_id, item_ids, db)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )


@router.get("/trip/{trip_id}/suggestions/rule-based", response_model=RuleBasedSuggestionResponse)
async def suggest_rule_based(
    trip_id: int,
    trip_type: Optional[str] = Query(None, description="Free-text trip type, defaults to the trip keywords"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """One deterministic suggestion line per trip day."""
    trip = get_trip_or_404(trip_id, db)
    destinations = list_trip_destinations(trip_id, db)
    try:
        lines = suggestion_service.rule_based_itinerary(trip, destinations, trip_type)
        season = suggestion_service.season_for_month(
            suggestion_service.parse_iso_date(trip.start_date).month
        )
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Trip dates must be ISO dates"
        )
    
    return RuleBasedSuggestionResponse(
        trip_id=trip.id,
        trip_type=suggestion_service.type_bucket(trip_type or trip.keywords),
        season=season,
        lines=lines
    )


@router.get("/trip/{trip_id}/suggestions/template", response_model=TemplateSuggestionResponse)
async def suggest_template(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Markdown itinerary with activities picked per destination type."""
    trip = get_trip_or_404(trip_id, db)
    destinations = list_trip_destinations(trip_id, db)
    try:
        itinerary = suggestion_service.template_itinerary(trip, destinations)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Trip dates must be ISO dates"
        )
    
    return TemplateSuggestionResponse(trip_id=trip.id, itinerary=itinerary)


@router.post(
    "/trip/{trip_id}/suggestions/apply",
    response_model=ApplySuggestionResponse,
    status_code=status.HTTP_201_CREATED
)
async def apply_suggestions(
    trip_id: int,
    request: ApplySuggestionRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Save generated itinerary text as itinerary items.
    
    Travel tips found in the text are saved together as one trip note.
    Items are appended after the trip's existing items.
    """
    trip = get_trip_or_404(trip_id, db)
    drafts, tips = suggestion_service.parse_suggestions(request.text)
    if not drafts and not tips:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No valid itinerary items or travel tips found to save."
        )
    
    next_order = db.query(ItineraryItem).filter(ItineraryItem.trip_id == trip_id).count()
    item_date = request.date or trip.start_date
    items = []
    for offset, (title, description) in enumerate(drafts):
        item = ItineraryItem(
            trip_id=trip_id,
            date=item_date,
            title=title,
            description=description,
            order=next_order + offset
        )
        db.add(item)
        items.append(item)
    
    tips_note = None
    if tips:
        tips_note = Note(
            trip_id=trip_id,
            created_by=current_user.id,
            title="Travel Tips",
            content="\n".join(tips),
            date=utc_now_iso()
        )
        db.add(tips_note)
    
    db.commit()
    for item in items:
        db.refresh(item)
    
    logger.info(f"Applied {len(items)} suggested items and {len(tips)} tips to trip {trip_id}")
    return ApplySuggestionResponse(
        items=[ItineraryItemResponse.model_validate(item) for item in items],
        tips_note_id=tips_note.id if tips_note else None
    )


@router.get("/{item_id}", response_model=ItineraryItemResponse)
async def get_item(
    item_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get an itinerary item by ID."""
    item = db.query(ItineraryItem).filter(ItineraryItem.id == item_id).first()
    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Itinerary item not found"
        )
    return item


@router.patch("/{item_id}", response_model=ItineraryItemResponse)
async def update_item(
    item_id: int,
    item_data: ItineraryItemUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update only the supplied item fields, including its order."""
    item = db.query(ItineraryItem).filter(ItineraryItem.id == item_id).first()
    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Itinerary item not found"
        )
    
    for field, value in item_data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(item, field, value)
    db.commit()
    db.refresh(item)
    return item


@router.delete("/{item_id}")
async def delete_item(
    item_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete an itinerary item."""
    db.query(ItineraryItem).filter(ItineraryItem.id == item_id).delete()
    db.commit()
    return {"message": "Itinerary item deleted successfully"}
