"""
Participation request linking a requester to an event.

Requests are never deleted: cancellation and moderation only change `status`.
"""

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Index, Integer

from explorewithme.db.base import Base
from explorewithme.main_service.models.enums import RequestStatus


class ParticipationRequest(Base):
    __tablename__ = "participation_requests"

    id = Column(Integer, primary_key=True, index=True)
    requester_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(Enum(RequestStatus, native_enum=False, length=20), nullable=False, default=RequestStatus.PENDING)
    created = Column(DateTime, nullable=False)

    __table_args__ = (
        # Capacity checks count CONFIRMED rows per event
        Index("ix_requests_event_status", "event_id", "status"),
    )

    def __repr__(self) -> str:
        return (
            f"<ParticipationRequest(id={self.id}, requester={self.requester_id}, "
            f"event={self.event_id}, status={self.status})>"
        )
