"""The fixed set of moods offered by the client.

Both the request schemas (to normalise labels to ids) and the UI (glyphs,
labels, chart colours) read from here, so the two never drift apart. The
server still accepts moods outside this list.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class MoodOption:
    id: str
    emoji: str
    label: str
    color: str


MOODS: tuple[MoodOption, ...] = (
    MoodOption("happy", "😊", "Happy", "#22c55e"),
    MoodOption("excited", "🤩", "Excited", "#f59e0b"),
    MoodOption("calm", "😌", "Calm", "#60a5fa"),
    MoodOption("tired", "😴", "Tired", "#8b5cf6"),
    MoodOption("anxious", "😰", "Anxious", "#f97316"),
    MoodOption("sad", "😢", "Sad", "#3b82f6"),
    MoodOption("angry", "😠", "Angry", "#ef4444"),
    MoodOption("neutral", "😐", "Neutral", "#6b7280"),
)

MOODS_BY_ID = {m.id: m for m in MOODS}

UNKNOWN_EMOJI = "❓"
UNKNOWN_COLOR = "#9ca3af"


def get_mood(mood_id: str) -> MoodOption:
    """Display metadata for a stored mood value.

    Unknown values get a placeholder glyph and use the raw value as label.
    """
    option = MOODS_BY_ID.get(mood_id)
    if option is None:
        return MoodOption(mood_id, UNKNOWN_EMOJI, mood_id, UNKNOWN_COLOR)
    return option


def normalize_mood(value: str) -> str:
    """Map a palette label or id in any casing to its id; leave other values alone."""
    key = value.strip().lower()
    if key in MOODS_BY_ID:
        return key
    return value.strip()
