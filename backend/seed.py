from datetime import timedelta

from sqlmodel import Session, select

from db import create_db_engine
from models import MoodEntry, utcnow
from store import MoodStore


def seed_database(store: MoodStore) -> int:
    """Seed the database with a week of sample moods. Returns rows inserted."""
    with Session(store.engine) as session:
        # Check if data already exists
        existing = session.exec(select(MoodEntry)).first()
        if existing:
            print("Database already has data, skipping seed.")
            return 0

        now = utcnow()
        sample_entries = [
            MoodEntry(mood="happy", energy_level=4, note="Good run this morning", created_at=now - timedelta(days=6)),
            MoodEntry(mood="tired", energy_level=2, note="Late night", created_at=now - timedelta(days=5)),
            MoodEntry(mood="calm", energy_level=3, created_at=now - timedelta(days=4)),
            MoodEntry(mood="anxious", energy_level=2, note="Deadline tomorrow", created_at=now - timedelta(days=3)),
            MoodEntry(mood="excited", energy_level=5, note="Shipped it", created_at=now - timedelta(days=2)),
            MoodEntry(mood="happy", energy_level=4, created_at=now - timedelta(days=1)),
            MoodEntry(mood="neutral", created_at=now - timedelta(hours=3)),
        ]

        session.add_all(sample_entries)
        session.commit()
        print(f"Seeded database with {len(sample_entries)} sample entries.")
        return len(sample_entries)


if __name__ == "__main__":
    store = MoodStore(create_db_engine())
    store.initialize()
    seed_database(store)
