from datetime import UTC

import httpx
import pytest
from fastapi.testclient import TestClient

from api_client import MoodApiClient
from app import create_app
from db import create_db_engine
from store import MoodStore
from view_state import (
    DELETE_ERROR,
    LOAD_ERROR,
    SAVE_ERROR,
    MoodTrackerState,
    format_timestamp,
)


@pytest.fixture(scope="function")
def api():
    engine = create_db_engine("sqlite://")
    with TestClient(create_app(store=MoodStore(engine))) as test_client:
        yield MoodApiClient(client=test_client)
    engine.dispose()


@pytest.fixture(scope="function")
def down_api():
    """An API that always answers 500."""
    def handler(request):
        return httpx.Response(500, json={"detail": "Failed"})

    return MoodApiClient(client=httpx.Client(transport=httpx.MockTransport(handler), base_url="http://api.test"))


def make_entry(i, mood="happy", energy_level=3, note=None):
    return {
        "id": i,
        "mood": mood,
        "note": note,
        "energy_level": energy_level,
        "created_at": "2026-10-18T09:05:00Z",
    }


def test_defaults():
    state = MoodTrackerState()
    assert state.active_tab == "log"
    assert state.energy_level == 3
    assert state.note == ""
    assert state.can_submit is False


def test_select_tab():
    state = MoodTrackerState()
    state.select_tab("stats")
    assert state.active_tab == "stats"
    with pytest.raises(ValueError):
        state.select_tab("settings")


def test_can_submit_requires_mood_and_idle():
    state = MoodTrackerState(selected_mood="calm")
    assert state.can_submit is True
    state.loading = True
    assert state.can_submit is False


def test_submit_without_mood_does_nothing(api):
    state = MoodTrackerState()
    assert state.submit(api) is False
    assert api.list_moods() == []


def test_submit_resets_form_and_refreshes(api):
    state = MoodTrackerState(selected_mood="excited", energy_level=5, note="  Big news  ")

    assert state.submit(api) is True

    assert state.selected_mood is None
    assert state.energy_level == 3
    assert state.note == ""
    assert state.loading is False
    assert state.error is None
    assert [m["mood"] for m in state.moods] == ["excited"]
    assert state.moods[0]["note"] == "Big news"
    assert state.stats["moodCounts"] == [{"mood": "excited", "count": 1}]


def test_submit_blank_note_sent_as_null(api):
    state = MoodTrackerState(selected_mood="calm", note="   ")
    state.submit(api)
    assert state.moods[0]["note"] is None


def test_failed_submit_keeps_form(down_api):
    state = MoodTrackerState(selected_mood="sad", energy_level=2, note="Rough day")

    assert state.submit(down_api) is False

    assert state.error == SAVE_ERROR
    assert state.selected_mood == "sad"
    assert state.energy_level == 2
    assert state.note == "Rough day"
    assert state.loading is False


def test_delete_refreshes(api):
    state = MoodTrackerState()
    first = api.create_mood("happy")
    api.create_mood("sad")
    state.refresh(api)
    assert len(state.moods) == 2

    assert state.delete(api, first["id"]) is True
    assert [m["mood"] for m in state.moods] == ["sad"]
    assert state.stats["moodCounts"] == [{"mood": "sad", "count": 1}]


def test_delete_failure_sets_error(down_api):
    state = MoodTrackerState(moods=[make_entry(1)])
    assert state.delete(down_api, 1) is False
    assert state.error == DELETE_ERROR
    assert len(state.moods) == 1


def test_refresh_failure_keeps_previous_data(down_api):
    state = MoodTrackerState(moods=[make_entry(1)], stats={"moodCounts": [], "averageEnergy": 0})
    state.refresh(down_api)
    assert state.error == LOAD_ERROR
    assert len(state.moods) == 1
    assert state.stats == {"moodCounts": [], "averageEnergy": 0}


def test_history_rows_truncated_to_20():
    state = MoodTrackerState(moods=[make_entry(i) for i in range(30)])
    rows = state.history_rows()
    assert len(rows) == 20
    assert rows[0].id == 0


def test_history_row_rendering():
    state = MoodTrackerState(moods=[
        make_entry(1, mood="calm", energy_level=2, note="Yoga"),
        make_entry(2, mood="meh", energy_level=None),
    ])
    known, unknown = state.history_rows()

    assert (known.emoji, known.label, known.note, known.energy) == ("😌", "Calm", "Yoga", "2/5")
    assert (unknown.emoji, unknown.label, unknown.energy) == ("❓", "meh", "—/5")


def test_stats_cards_placeholders():
    cards = MoodTrackerState().stats_cards()
    assert cards.total_entries == 0
    assert cards.average_energy == "—"
    assert cards.most_common == "—"


def test_stats_cards():
    state = MoodTrackerState(
        moods=[make_entry(i) for i in range(3)],
        stats={"moodCounts": [{"mood": "angry", "count": 2}], "averageEnergy": 3.456, "weeklyMoods": []},
    )
    cards = state.stats_cards()
    assert cards.total_entries == 3
    assert cards.average_energy == "3.5"
    assert cards.most_common == "😠"


def test_stats_cards_zero_average():
    state = MoodTrackerState(stats={"moodCounts": [], "averageEnergy": 0, "weeklyMoods": []})
    assert state.stats_cards().average_energy == "0.0"


def test_distribution():
    state = MoodTrackerState(stats={
        "moodCounts": [{"mood": "happy", "count": 3}, {"mood": "whatever", "count": 1}],
        "averageEnergy": 0,
        "weeklyMoods": [],
    })
    assert state.distribution() == [
        {"name": "Happy", "value": 3, "color": "#22c55e"},
        {"name": "whatever", "value": 1, "color": "#9ca3af"},
    ]
    assert MoodTrackerState().distribution() == []


def test_format_timestamp():
    assert format_timestamp("2026-10-18T09:05:00Z", tz=UTC) == "Oct 18, 9:05 AM"
    assert format_timestamp("2026-03-02T21:30:00+00:00", tz=UTC) == "Mar 2, 9:30 PM"
    assert format_timestamp("yesterday") == "yesterday"
    assert format_timestamp(None) == ""


def test_successful_delete_clears_previous_error(api, down_api):
    state = MoodTrackerState()
    first = api.create_mood("happy")
    second = api.create_mood("sad")
    state.refresh(api)

    assert state.delete(down_api, first["id"]) is False
    assert state.error == DELETE_ERROR

    assert state.delete(api, second["id"]) is True
    assert state.error is None
    assert [m["mood"] for m in state.moods] == ["happy"]


def test_successful_refresh_clears_previous_error(api, down_api):
    state = MoodTrackerState()
    state.refresh(down_api)
    assert state.error == LOAD_ERROR

    state.refresh(api)
    assert state.error is None
