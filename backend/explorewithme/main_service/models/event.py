"""
Event model and its location.

Key design decisions:
- `state` drives moderation: PENDING -> PUBLISHED | CANCELED
- confirmedRequests and views are never stored here; they are computed per
  response from participation requests and the stats service
- category, initiator and location are eagerly joined so a loaded Event is
  always a fully-resolved value (no lazy loads under the async session)
- Index on `event_date` for the range filters of public and admin search
"""

from sqlalchemy import (
    Boolean, CheckConstraint, Column, DateTime, Enum, Float, ForeignKey, Index, Integer, String, Text,
)
from sqlalchemy.orm import relationship

from explorewithme.db.base import Base
from explorewithme.main_service.models.enums import EventState


class Location(Base):
    __tablename__ = "locations"

    id = Column(Integer, primary_key=True, index=True)
    lat = Column(Float, nullable=False)
    lon = Column(Float, nullable=False)


class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    annotation = Column(String(2000), nullable=False)
    description = Column(Text, nullable=False)
    title = Column(String(120), nullable=False)
    event_date = Column(DateTime, nullable=False)
    created_on = Column(DateTime, nullable=False)
    published_on = Column(DateTime, nullable=True)
    paid = Column(Boolean, nullable=False, default=False)
    participant_limit = Column(Integer, nullable=False, default=0)
    request_moderation = Column(Boolean, nullable=False, default=True)
    comments_enabled = Column(Boolean, nullable=False, default=True)
    state = Column(Enum(EventState, native_enum=False, length=20), nullable=False, default=EventState.PENDING)

    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    initiator_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=False)

    category = relationship("Category", lazy="joined", innerjoin=True)
    initiator = relationship("User", lazy="joined", innerjoin=True)
    location = relationship("Location", lazy="joined", innerjoin=True)

    __table_args__ = (
        CheckConstraint("participant_limit >= 0", name="check_participant_limit_non_negative"),
        Index("ix_events_event_date", "event_date"),
        Index("ix_events_state_event_date", "state", "event_date"),
    )

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, title={self.title}, state={self.state})>"
