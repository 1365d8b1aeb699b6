"""
Trip model for collaborative travel planning.
"""
from sqlalchemy import Column, String, Text, ForeignKey, Integer, Table
from sqlalchemy.orm import relationship
from app.db.base import Base, BaseModel


# Association table for Trip and User many-to-many (collaborators)
trip_collaborators = Table(
    "trip_collaborators",
    Base.metadata,
    Column("trip_id", Integer, ForeignKey("trips.id"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id"), primary_key=True),
)


class Trip(BaseModel):
    """Trip model, the parent of destinations, itinerary, expenses, notes and reminders."""
    __tablename__ = "trips"
    
    name = Column(String(200), nullable=False)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    start_date = Column(String(32), nullable=False)  # ISO date, not validated
    end_date = Column(String(32), nullable=False)  # ISO date, not validated
    description = Column(Text, nullable=True)
    keywords = Column(Text, nullable=True)  # Special interests, free text
    
    # Relationships. Child entities reference trips by id only and are not
    # removed when a trip is deleted.
    owner = relationship("User", back_populates="owned_trips")
    collaborators = relationship("User", secondary=trip_collaborators, lazy="selectin")

    @property
    def collaborator_ids(self):
        return [user.id for user in self.collaborators]
