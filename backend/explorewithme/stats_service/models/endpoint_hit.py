"""
EndpointHit: one recorded request to a main service endpoint.

Rows are append-only; statistics are aggregated from them on read.
"""

from sqlalchemy import Column, DateTime, Index, Integer, String

from explorewithme.db.base import StatsBase


class EndpointHit(StatsBase):
    __tablename__ = "endpoint_hits"

    id = Column(Integer, primary_key=True, index=True)
    app = Column(String(255), nullable=False)
    uri = Column(String(512), nullable=False)
    ip = Column(String(45), nullable=False)
    timestamp = Column(DateTime, nullable=False)

    __table_args__ = (
        # Every stats query filters by a time range and usually by uri
        Index("ix_endpoint_hits_uri_timestamp", "uri", "timestamp"),
    )

    def __repr__(self) -> str:
        return f"<EndpointHit(id={self.id}, uri={self.uri}, ip={self.ip})>"
