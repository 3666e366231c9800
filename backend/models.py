from datetime import UTC, datetime

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


class MoodEntry(SQLModel, table=True):
    __tablename__ = "moods"
    __table_args__ = (
        CheckConstraint("energy_level >= 1 AND energy_level <= 5", name="ck_moods_energy_level_range"),
        # Never hand out the id of a deleted row again
        {"sqlite_autoincrement": True},
    )

    id: int | None = Field(default=None, primary_key=True)
    mood: str = Field(max_length=50)
    note: str | None = Field(default=None)
    energy_level: int | None = Field(default=None)  # 1 (lowest) to 5 (highest)
    created_at: datetime = Field(default_factory=utcnow, index=True)  # UTC
