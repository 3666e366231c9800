"""Mood Tracker UI.

Run with: streamlit run frontend/streamlit_app.py
"""
import logging

import plotly.graph_objects as go
import streamlit as st

from api_client import MoodApiClient
from palette import MOODS
from view_state import MoodTrackerState

logging.basicConfig(level=logging.INFO)

TAB_LABELS = {"log": "Log Mood", "history": "History", "stats": "Stats"}


@st.cache_resource
def get_api() -> MoodApiClient:
    return MoodApiClient()


st.set_page_config(page_title="Mood Tracker", page_icon="😊")

api = get_api()

# State lives only for this browser session
if "tracker" not in st.session_state:
    st.session_state.tracker = MoodTrackerState()
    st.session_state.tracker.refresh(api)

state: MoodTrackerState = st.session_state.tracker

st.markdown("<h1 style='text-align: center;'>Mood Tracker</h1>", unsafe_allow_html=True)

tab = st.radio(
    "View",
    list(TAB_LABELS),
    index=list(TAB_LABELS).index(state.active_tab),
    format_func=lambda t: TAB_LABELS[t],
    horizontal=True,
    label_visibility="collapsed",
)
state.select_tab(tab)

if state.error:
    st.error(state.error)


def render_log():
    st.subheader("How are you feeling?")

    for i in range(0, len(MOODS), 4):
        cols = st.columns(4)
        for col, mood in zip(cols, MOODS[i : i + 4]):
            with col:
                selected = state.selected_mood == mood.id
                if st.button(
                    f"{mood.emoji} {mood.label}",
                    key=f"mood_{mood.id}",
                    type="primary" if selected else "secondary",
                    use_container_width=True,
                ):
                    state.selected_mood = mood.id
                    st.rerun()

    state.energy_level = st.slider("Energy Level", 1, 5, state.energy_level, format="%d/5")
    state.note = st.text_area("Note", state.note, placeholder="Add a note (optional)...")

    label = "Saving..." if state.loading else "Save Mood"
    if st.button(label, type="primary", disabled=not state.can_submit, use_container_width=True):
        if state.submit(api):
            st.toast("Mood saved!", icon="✅")
        st.rerun()


def render_history():
    st.subheader("Recent Moods")
    rows = state.history_rows()
    if not rows:
        st.info("No moods logged yet. Start tracking!")
        return

    for row in rows:
        emoji_col, details_col, meta_col, delete_col = st.columns([1, 5, 3, 1])
        with emoji_col:
            st.markdown(f"## {row.emoji}")
        with details_col:
            st.markdown(f"**{row.label}**")
            if row.note:
                st.caption(row.note)
        with meta_col:
            st.caption(f"Energy: {row.energy}")
            st.caption(row.timestamp)
        with delete_col:
            if st.button("✕", key=f"delete_{row.id}", help="Delete"):
                state.delete(api, row.id)
                st.rerun()


def render_stats():
    cards = state.stats_cards()
    m1, m2, m3 = st.columns(3)
    with m1:
        st.metric("Total Entries", cards.total_entries)
    with m2:
        st.metric("Avg Energy", cards.average_energy)
    with m3:
        st.metric("Most Common", cards.most_common)

    st.divider()
    st.subheader("Mood Distribution")
    slices = state.distribution()
    if not slices:
        st.info("No data yet")
        return

    fig = go.Figure(
        go.Pie(
            labels=[s["name"] for s in slices],
            values=[s["value"] for s in slices],
            marker={"colors": [s["color"] for s in slices]},
            textinfo="label+percent",
        )
    )
    fig.update_layout(showlegend=False, margin={"t": 10, "b": 10, "l": 10, "r": 10})
    st.plotly_chart(fig, use_container_width=True)


if state.active_tab == "log":
    render_log()
elif state.active_tab == "history":
    render_history()
else:
    render_stats()
