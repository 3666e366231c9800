from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator
from sqlmodel import SQLModel

from palette import normalize_mood

MAX_MOOD_LENGTH = 50


class MoodCreate(BaseModel):
    mood: str
    note: str | None = None
    energy_level: StrictInt | None = None  # JSON true/false are not energy levels

    @field_validator("mood")
    @classmethod
    def validate_mood(cls, v):
        # Any non-blank value is accepted; palette labels are mapped to their ids
        if not v or not v.strip():
            raise ValueError("Mood is required")
        normalized = normalize_mood(v)
        if len(normalized) > MAX_MOOD_LENGTH:
            raise ValueError(f"Mood must be at most {MAX_MOOD_LENGTH} characters")
        return normalized

    @field_validator("note")
    @classmethod
    def validate_note(cls, v):
        if v is None:
            return None
        return v.strip() or None

    @field_validator("energy_level")
    @classmethod
    def validate_energy_level(cls, v):
        if v is not None and not 1 <= v <= 5:
            raise ValueError("Energy level must be between 1 and 5")
        return v


class MoodResponse(SQLModel):
    id: int
    mood: str
    note: str | None = None
    energy_level: int | None = None
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        # Some drivers hand back the stored UTC value without tzinfo
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v


class DeleteResponse(BaseModel):
    message: str
    deleted: MoodResponse


class MoodCount(BaseModel):
    mood: str
    count: int


class WeeklyMood(BaseModel):
    date: str  # YYYY-MM-DD
    mood: str
    count: int


class StatsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    mood_counts: list[MoodCount] = Field(alias="moodCounts")
    average_energy: float = Field(alias="averageEnergy")
    weekly_moods: list[WeeklyMood] = Field(alias="weeklyMoods")


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    database: str
