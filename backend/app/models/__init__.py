"""Models package - Import all models for SQLAlchemy registration."""
from app.models.user import User
from app.models.trip import Trip, trip_collaborators
from app.models.destination import Destination
from app.models.itinerary import ItineraryItem
from app.models.expense import Expense, expense_splits
from app.models.note import Note
from app.models.reminder import Reminder

__all__ = [
    "User",
    "Trip",
    "trip_collaborators",
    "Destination",
    "ItineraryItem",
    "Expense",
    "expense_splits",
    "Note",
    "Reminder",
]
