"""
Reminder routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from app.db.session import get_db
from app.models.user import User
from app.models.reminder import Reminder
from app.schemas.reminder import ReminderCreate, ReminderUpdate, ReminderResponse
from app.api.dependencies import get_current_user
from app.core.utils import utc_now_iso

router = APIRouter(prefix="/reminders", tags=["reminders"])


@router.post("", response_model=ReminderResponse, status_code=status.HTTP_201_CREATED)
async def create_reminder(
    reminder_data: ReminderCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a reminder for a trip."""
    reminder = Reminder(
        trip_id=reminder_data.trip_id,
        content=reminder_data.content,
        remind_at=reminder_data.remind_at,
        created_by=current_user.id
    )
    db.add(reminder)
    db.commit()
    db.refresh(reminder)
    return reminder


@router.get("/trip/{trip_id}", response_model=List[ReminderResponse])
async def list_reminders(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List reminders of a trip, earliest first."""
    return db.query(Reminder).filter(
        Reminder.trip_id == trip_id
    ).order_by(Reminder.remind_at.asc(), Reminder.id.asc()).all()


@router.get("/trip/{trip_id}/upcoming", response_model=List[ReminderResponse])
async def list_upcoming_reminders(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    List reminders that are not due yet.
    
    remind_at is compared as a string against the current UTC time, so only
    ISO timestamps in UTC compare correctly.
    """
    return db.query(Reminder).filter(
        Reminder.trip_id == trip_id,
        Reminder.remind_at >= utc_now_iso()
    ).order_by(Reminder.remind_at.asc(), Reminder.id.asc()).all()


@router.get("/{reminder_id}", response_model=ReminderResponse)
async def get_reminder(
    reminder_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a reminder by ID."""
    reminder = db.query(Reminder).filter(Reminder.id == reminder_id).first()
    if not reminder:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Reminder not found"
        )
    return reminder


@router.patch("/{reminder_id}", response_model=ReminderResponse)
async def update_reminder(
    reminder_id: int,
    reminder_data: ReminderUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update content and/or remind_at."""
    reminder = db.query(Reminder).filter(Reminder.id == reminder_id).first()
    if not reminder:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Reminder not found"
        )
    
    for field, value in reminder_data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(reminder, field, value)
    db.commit()
    db.refresh(reminder)
    return reminder


@router.delete("/{reminder_id}")
async def delete_reminder(
    reminder_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a reminder."""
    db.query(Reminder).filter(Reminder.id == reminder_id).delete()
    db.commit()
    return {"message": "Reminder deleted successfully"}
