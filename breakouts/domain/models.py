"""SQLAlchemy models for the breakout project data."""

from __future__ import annotations

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class BreakoutSession(Base):
    """Breakout session proposal with its scheduling preferences."""

    __tablename__ = "sessions"

    number = Column(Integer, primary_key=True, autoincrement=False)
    title = Column(String(300), nullable=False)
    labels = Column(Text, nullable=True)  # Semicolon-separated, e.g. "session;track: media"
    chairs = Column(Text, nullable=True)  # Comma-separated, "@login" or display name
    conflicts = Column(Text, nullable=True)  # e.g. "#12, #15"
    duration = Column(Integer, nullable=True)  # 30 or 60 minutes
    capacity = Column(Integer, nullable=False, default=0)  # 0 = don't know

    # Current grid position (names of the room and slot options)
    room = Column(String(200), nullable=True)
    slot = Column(String(50), nullable=True)
    updated_at = Column(DateTime, nullable=True)

    def label_list(self) -> list[str]:
        return [l.strip() for l in (self.labels or "").split(";") if l.strip()]

    def __repr__(self) -> str:
        return f"<BreakoutSession(number={self.number}, title='{self.title}', room={self.room}, slot={self.slot})>"


class Room(Base):
    """Room option, e.g. 'Salon Ecija (30)'."""

    __tablename__ = "rooms"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False, unique=True)
    label = Column(String(200), nullable=True)
    capacity = Column(Integer, nullable=False)
    pos = Column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<Room(name='{self.name}', capacity={self.capacity})>"


class Slot(Base):
    """Slot option, e.g. '9:30 - 10:30'."""

    __tablename__ = "slots"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), nullable=False, unique=True)
    start = Column(String(5), nullable=True)
    end = Column(String(5), nullable=True)
    duration = Column(Integer, nullable=False)  # minutes
    pos = Column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<Slot(name='{self.name}', duration={self.duration})>"
