"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from app.api.routes import (
    users, trips, destinations, itinerary, expenses, notes, reminders
)

api_router = APIRouter()

# Include all route modules
api_router.include_router(users.router)
api_router.include_router(trips.router)
api_router.include_router(destinations.router)
api_router.include_router(itinerary.router)
api_router.include_router(expenses.router)
api_router.include_router(notes.router)
api_router.include_router(reminders.router)
