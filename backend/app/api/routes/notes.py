"""
Note routes. Notes belong to a trip or stand alone.
"""
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from app.db.session import get_db
from app.models.user import User
from app.models.note import Note
from app.schemas.note import NoteCreate, NoteUpdate, NoteResponse
from app.services import summary_service
from app.api.dependencies import get_current_user
from app.core.utils import utc_now_iso

router = APIRouter(prefix="/notes", tags=["notes"])


@router.post("", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    note_data: NoteCreate,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Create a note.
    
    With is_summary set, a summary is requested after the note is stored and
    the response is sent; until then the note has no summary.
    """
    note = Note(
        trip_id=note_data.trip_id,
        created_by=current_user.id,
        title=note_data.title,
        content=note_data.content,
        date=utc_now_iso()
    )
    db.add(note)
    db.commit()
    db.refresh(note)
    
    if note_data.is_summary:
        background_tasks.add_task(
            summary_service.summarize_note, note.id, note.title, note.content
        )
    
    return note


@router.get("", response_model=List[NoteResponse])
async def list_standalone_notes(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List the current user's notes that are not attached to a trip."""
    return db.query(Note).filter(
        Note.created_by == current_user.id,
        Note.trip_id.is_(None)
    ).order_by(Note.id.asc()).all()


@router.get("/summary-available")
async def summary_available(
    current_user: User = Depends(get_current_user)
):
    """Whether a text-generation provider is configured."""
    return {"available": summary_service.summary_available()}


@router.get("/trip/{trip_id}", response_model=List[NoteResponse])
async def list_trip_notes(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List notes of a trip, newest first."""
    return db.query(Note).filter(
        Note.trip_id == trip_id
    ).order_by(Note.id.desc()).all()


@router.get("/{note_id}", response_model=NoteResponse)
async def get_note(
    note_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a note by ID."""
    note = db.query(Note).filter(Note.id == note_id).first()
    if not note:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Note not found"
        )
    return note


@router.patch("/{note_id}", response_model=NoteResponse)
async def update_note(
    note_id: int,
    note_data: NoteUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Replace a note's content."""
    note = db.query(Note).filter(Note.id == note_id).first()
    if not note:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Note not found"
        )
    
    note.content = note_data.content
    db.commit()
    db.refresh(note)
    return note


@router.delete("/{note_id}")
async def delete_note(
    note_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a note."""
    db.query(Note).filter(Note.id == note_id).delete()
    db.commit()
    return {"message": "Note deleted successfully"}
