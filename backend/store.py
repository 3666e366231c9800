"""Persistence for mood entries.

A MoodStore is built once at startup around an engine and handed to the API
layer. Every mutation is a single statement committed on its own, so no
locking is needed beyond what the database already does.
"""
import logging
from datetime import datetime

from sqlalchemy import delete, text
from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from db import create_db_and_tables
from models import MoodEntry

logger = logging.getLogger(__name__)


class MoodStore:
    def __init__(self, engine: Engine):
        self.engine = engine

    def session(self) -> Session:
        # Rows stay readable after commit/close so they can be returned to callers
        return Session(self.engine, expire_on_commit=False)

    def initialize(self):
        """Create the moods table and its constraints if missing."""
        create_db_and_tables(self.engine)
        logger.info("Database initialized")

    def ping(self) -> bool:
        """Return True if the database answers a trivial query."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning(f"Database ping failed: {str(e)}")
            return False

    def list(self, start: datetime | None = None, end: datetime | None = None) -> list[MoodEntry]:
        """Entries newest first, optionally limited to start <= created_at <= end."""
        stmt = select(MoodEntry)
        if start is not None:
            stmt = stmt.where(MoodEntry.created_at >= start)
        if end is not None:
            stmt = stmt.where(MoodEntry.created_at <= end)
        stmt = stmt.order_by(MoodEntry.created_at.desc(), MoodEntry.id.desc())

        with self.session() as session:
            return list(session.exec(stmt).all())

    def insert(self, mood: str, note: str | None = None, energy_level: int | None = None) -> MoodEntry:
        """Persist a new entry and return it with its generated id and created_at.

        Raises ValueError for a blank mood. An energy level outside 1-5 is
        rejected by the table's check constraint (IntegrityError).
        """
        if not mood or not mood.strip():
            raise ValueError("Mood is required")

        entry = MoodEntry(mood=mood, note=note, energy_level=energy_level)
        with self.session() as session:
            try:
                session.add(entry)
                session.commit()
            except Exception:
                session.rollback()
                raise
            session.refresh(entry)
        return entry

    def delete_by_id(self, mood_id: int) -> MoodEntry | None:
        """Delete an entry, returning its former data, or None if it did not exist.

        Runs as a single DELETE ... RETURNING statement; of two concurrent
        deletes of the same id only one gets the row back.
        """
        table = MoodEntry.__table__
        stmt = delete(table).where(table.c.id == mood_id).returning(*table.c)
        with self.engine.begin() as conn:
            row = conn.execute(stmt).first()
        if row is None:
            return None
        return MoodEntry(**row._mapping)
