from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import relationship

from explorewithme.db.base import Base

compilation_events = Table(
    "compilation_events",
    Base.metadata,
    Column("compilation_id", Integer, ForeignKey("compilations.id", ondelete="CASCADE"), primary_key=True),
    Column("event_id", Integer, ForeignKey("events.id", ondelete="CASCADE"), primary_key=True),
)


class Compilation(Base):
    __tablename__ = "compilations"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(128), nullable=False, unique=True)
    pinned = Column(Boolean, nullable=False, default=False)

    # Association rows only; the events' own lifecycle is not owned here
    events = relationship("Event", secondary=compilation_events, lazy="selectin", order_by="Event.id")

    def __repr__(self) -> str:
        return f"<Compilation(id={self.id}, title={self.title}, pinned={self.pinned})>"
