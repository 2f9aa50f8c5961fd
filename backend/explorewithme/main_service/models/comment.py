"""
Comment on a published event. Deletion is a soft flag an admin can clear.
"""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from explorewithme.db.base import Base


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    text = Column(String(2000), nullable=False)
    author_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    created_on = Column(DateTime, nullable=False)
    updated_on = Column(DateTime, nullable=True)
    edited = Column(Boolean, nullable=False, default=False)
    is_deleted = Column(Boolean, nullable=False, default=False)

    author = relationship("User", lazy="joined", innerjoin=True)

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, author={self.author_id}, event={self.event_id}, deleted={self.is_deleted})>"
