"""In-memory state behind the three UI views.

Nothing here talks to Streamlit, so the behaviour of the views (form reset,
refetch after mutations, truncation, fallbacks for unknown moods) can be
exercised without a browser. Failures from the API never escape: they are
logged and turned into a transient `error` message.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime

from api_client import ApiError, MoodApiClient
from palette import get_mood

logger = logging.getLogger(__name__)

TABS = ("log", "history", "stats")
HISTORY_LIMIT = 20
DEFAULT_ENERGY = 3
PLACEHOLDER = "—"

SAVE_ERROR = "Failed to save mood. Please try again."
DELETE_ERROR = "Failed to delete mood. Please try again."
LOAD_ERROR = "Could not load your moods. Is the API running?"


@dataclass
class HistoryRow:
    id: int
    emoji: str
    label: str
    note: str | None
    energy: str
    timestamp: str


@dataclass
class StatsCards:
    total_entries: int
    average_energy: str
    most_common: str


@dataclass
class MoodTrackerState:
    active_tab: str = "log"
    moods: list[dict] = field(default_factory=list)
    stats: dict | None = None
    selected_mood: str | None = None
    energy_level: int = DEFAULT_ENERGY
    note: str = ""
    loading: bool = False
    error: str | None = None

    @property
    def can_submit(self) -> bool:
        return self.selected_mood is not None and not self.loading

    def select_tab(self, tab: str):
        if tab not in TABS:
            raise ValueError(f"Unknown tab: {tab}")
        self.active_tab = tab

    def reset_form(self):
        self.selected_mood = None
        self.energy_level = DEFAULT_ENERGY
        self.note = ""

    def refresh(self, api: MoodApiClient):
        """Fetch the entry list and stats; keep the old data if a fetch fails."""
        self.error = None
        try:
            self.moods = api.list_moods()
        except ApiError as e:
            logger.error(f"Failed to fetch moods: {str(e)}")
            self.error = LOAD_ERROR
        try:
            self.stats = api.get_stats()
        except ApiError as e:
            logger.error(f"Failed to fetch stats: {str(e)}")
            self.error = LOAD_ERROR

    def submit(self, api: MoodApiClient) -> bool:
        """Save the current form. Returns True on success."""
        if not self.can_submit:
            return False

        self.loading = True
        self.error = None
        try:
            api.create_mood(
                self.selected_mood,
                energy_level=self.energy_level,
                note=self.note.strip() or None,
            )
        except ApiError as e:
            logger.error(f"Failed to save mood: {str(e)}")
            self.error = SAVE_ERROR
            return False
        finally:
            self.loading = False

        self.reset_form()
        self.refresh(api)
        return True

    def delete(self, api: MoodApiClient, mood_id: int) -> bool:
        self.error = None
        try:
            api.delete_mood(mood_id)
        except ApiError as e:
            logger.error(f"Failed to delete mood {mood_id}: {str(e)}")
            self.error = DELETE_ERROR
            return False
        self.refresh(api)
        return True

    def history_rows(self, limit: int = HISTORY_LIMIT) -> list[HistoryRow]:
        rows = []
        for entry in self.moods[:limit]:
            option = get_mood(entry["mood"])
            energy = entry.get("energy_level")
            rows.append(
                HistoryRow(
                    id=entry["id"],
                    emoji=option.emoji,
                    label=option.label,
                    note=entry.get("note"),
                    energy=f"{energy}/5" if energy is not None else f"{PLACEHOLDER}/5",
                    timestamp=format_timestamp(entry.get("created_at")),
                )
            )
        return rows

    def stats_cards(self) -> StatsCards:
        # Total comes from the fetched list, not from the server aggregate
        average = self.stats.get("averageEnergy") if self.stats else None
        counts = self.stats.get("moodCounts") if self.stats else None
        return StatsCards(
            total_entries=len(self.moods),
            average_energy=f"{average:.1f}" if average is not None else PLACEHOLDER,
            most_common=get_mood(counts[0]["mood"]).emoji if counts else PLACEHOLDER,
        )

    def distribution(self) -> list[dict]:
        """Pie chart slices built from moodCounts, coloured from the palette."""
        if not self.stats:
            return []
        slices = []
        for item in self.stats.get("moodCounts", []):
            option = get_mood(item["mood"])
            slices.append({"name": option.label, "value": int(item["count"]), "color": option.color})
        return slices


def format_timestamp(value: str | None, tz=None) -> str:
    """Render an ISO timestamp like 'Oct 18, 9:05 AM' in local time."""
    if not value:
        return ""
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    if dt.tzinfo is not None:
        dt = dt.astimezone(tz)
    hour = dt.strftime("%I").lstrip("0")
    return f"{dt.strftime('%b')} {dt.day}, {hour}:{dt.strftime('%M %p')}"
