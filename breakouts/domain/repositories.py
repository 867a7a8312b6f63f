"""Repository classes for project data access."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from .models import BreakoutSession, Room, Slot


class SessionRepository:
    """Repository for breakout session records."""

    @staticmethod
    def get_all(session: Session) -> List[BreakoutSession]:
        """Get all sessions ordered by number."""
        return session.query(BreakoutSession).order_by(BreakoutSession.number).all()

    @staticmethod
    def get_by_number(session: Session, number: int) -> Optional[BreakoutSession]:
        """Get session by number."""
        return session.query(BreakoutSession).filter(BreakoutSession.number == number).first()

    @staticmethod
    def bulk_create(session: Session, records: List[BreakoutSession]) -> None:
        """Create multiple sessions."""
        session.add_all(records)
        session.commit()

    @staticmethod
    def assign_slot_and_room(
        session: Session,
        number: int,
        room: Optional[str],
        slot: Optional[str],
    ) -> BreakoutSession:
        """
        Write a session's room and slot back to the project.

        Each call is its own transaction so that one failed write does not
        undo the others.

        Raises:
            LookupError: If the session does not exist
        """
        record = SessionRepository.get_by_number(session, number)
        if record is None:
            raise LookupError(f"Session #{number} not found")
        record.room = room
        record.slot = slot
        record.updated_at = datetime.utcnow()
        session.commit()
        return record


class RoomRepository:
    """Repository for room options."""

    @staticmethod
    def get_all(session: Session) -> List[Room]:
        """Get all rooms in display order."""
        return session.query(Room).order_by(Room.pos, Room.id).all()

    @staticmethod
    def bulk_create(session: Session, rooms: List[Room]) -> None:
        """Create multiple rooms."""
        session.add_all(rooms)
        session.commit()


class SlotRepository:
    """Repository for slot options."""

    @staticmethod
    def get_all(session: Session) -> List[Slot]:
        """Get all slots in display order."""
        return session.query(Slot).order_by(Slot.pos, Slot.id).all()

    @staticmethod
    def bulk_create(session: Session, slots: List[Slot]) -> None:
        """Create multiple slots."""
        session.add_all(slots)
        session.commit()
