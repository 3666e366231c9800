"""Read-only statistics over all stored mood entries."""
from datetime import UTC, date, datetime, timedelta

from sqlalchemy import func
from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from models import MoodEntry, utcnow

WEEKLY_WINDOW_DAYS = 7


class MoodAggregator:
    def __init__(self, engine: Engine):
        self.engine = engine

    def mood_counts(self) -> list[tuple[str, int]]:
        """(mood, count) for every distinct mood, most frequent first."""
        count = func.count(MoodEntry.id).label("count")
        stmt = (
            select(MoodEntry.mood, count)
            .group_by(MoodEntry.mood)
            .order_by(count.desc(), MoodEntry.mood)
        )
        with Session(self.engine) as session:
            return [(mood, int(n)) for mood, n in session.exec(stmt).all()]

    def average_energy(self) -> float:
        """Mean energy level over entries that have one; 0 when none do."""
        stmt = select(func.avg(MoodEntry.energy_level)).where(MoodEntry.energy_level.is_not(None))
        with Session(self.engine) as session:
            avg = session.exec(stmt).one()
        if avg is None:
            return 0.0
        return float(avg)

    def weekly_moods(self, now: datetime | None = None) -> list[tuple[str, str, int]]:
        """(date, mood, count) for the trailing 7 days, newest date first.

        `now` is an aware datetime; dates are calendar days in UTC.
        """
        since = (now or utcnow()).astimezone(UTC) - timedelta(days=WEEKLY_WINDOW_DAYS)
        day = func.date(MoodEntry.created_at)
        count = func.count(MoodEntry.id).label("count")
        stmt = (
            select(day.label("date"), MoodEntry.mood, count)
            .where(MoodEntry.created_at >= since)
            .group_by(day, MoodEntry.mood)
            .order_by(day.desc(), count.desc(), MoodEntry.mood)
        )
        with Session(self.engine) as session:
            rows = session.exec(stmt).all()
        return [(_as_date_string(d), mood, int(n)) for d, mood, n in rows]

    def summary(self, now: datetime | None = None) -> dict:
        return {
            "moodCounts": [{"mood": m, "count": n} for m, n in self.mood_counts()],
            "averageEnergy": self.average_energy(),
            "weeklyMoods": [
                {"date": d, "mood": m, "count": n} for d, m, n in self.weekly_moods(now)
            ],
        }


def _as_date_string(value) -> str:
    # SQLite's date() yields text, Postgres yields a date
    if isinstance(value, (date, datetime)):
        return value.strftime("%Y-%m-%d")
    return str(value)
