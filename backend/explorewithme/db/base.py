"""
Declarative bases.

The main service and the stats service keep separate metadata so each can be
deployed against its own database.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Tables of the main service."""


class StatsBase(DeclarativeBase):
    """Tables of the stats service."""
