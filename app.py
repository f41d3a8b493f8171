"""Streamlit UI for trying the trip compatibility ranker."""

from __future__ import annotations

import datetime as dt
import json
import logging
import sys
from pathlib import Path

import pandas as pd
import streamlit as st

sys.path.insert(0, str(Path(__file__).resolve().parent))

from src.tripmatch.config import settings  # noqa: E402
from src.tripmatch.engine import (  # noqa: E402
    TripRanker,
    load_sample_search,
    load_sample_trips,
    load_trips_from_json,
)
from src.tripmatch.models import (  # noqa: E402
    ConversationLevel,
    MatchResult,
    RidePreferences,
    SearchIntent,
    TripCandidate,
)

logging.basicConfig(level=settings.log_level)

st.set_page_config(page_title="Trip Matching", layout="wide")
st.title("Trip Compatibility Ranking")

CONVERSATION_OPTIONS = [level.value for level in ConversationLevel]

# Sample trips depart on 2025-10-13; evaluate them from the evening before.
SAMPLE_NOW = dt.datetime(2025, 10, 12, 22, 0, tzinfo=dt.timezone.utc)

_UPLOAD_HELP = """\
Upload a JSON array of trips:

```json
[
  {
    "id": "1",
    "driver_id": "2",
    "origin": "Dubai Marina",
    "destination": "Abu Dhabi Corniche",
    "departure": "2025-10-13T08:00:00",
    "price_per_seat": 50,
    "total_seats": 4,
    "remaining_seats": 2,
    "driver_rating": 4.8,
    "driver_verified": true
  }
]
```

Optional fields: `status`, `trip_type`, `driver_name`, `preferences`.
Malformed records are skipped and reported in the log.
"""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _search_form(default: SearchIntent) -> SearchIntent | None:
    with st.form("search"):
        cols = st.columns(2)
        origin = cols[0].text_input("From *", value=default.origin)
        destination = cols[1].text_input("To *", value=default.destination)
        max_price = st.number_input(
            "Max price per seat (0 = no limit)",
            min_value=0.0, value=float(default.max_price or 0),
        )

        st.markdown("**Your ride preferences**")
        pcols = st.columns(4)
        smoking = pcols[0].checkbox("Smoking", value=default.preferences.smoking)
        music = pcols[1].checkbox("Music", value=default.preferences.music)
        pets = pcols[2].checkbox("Pets", value=default.preferences.pets)
        conversation = pcols[3].selectbox(
            "Conversation",
            CONVERSATION_OPTIONS,
            index=CONVERSATION_OPTIONS.index(default.preferences.conversation.value),
        )

        if not st.form_submit_button("Rank Trips", type="primary"):
            return None

    try:
        return SearchIntent(
            rider_id=default.rider_id,
            origin=origin,
            destination=destination,
            max_price=max_price or None,
            preferences=RidePreferences(
                smoking=smoking, music=music, pets=pets,
                conversation=conversation,
            ),
        )
    except ValueError as e:
        st.error(f"Invalid search: {e}")
        return None


def _render_results(
    results: list[MatchResult],
    trips: list[TripCandidate],
) -> None:
    st.markdown("---")
    st.header(f"Ranked Trips ({len(results)})")
    if not results:
        st.info("No eligible trips for this search.")
        return

    by_id = {t.id: t for t in trips}
    rows = []
    for r in results:
        trip = by_id[r.trip_id]
        rows.append({
            "trip": r.trip_id,
            "driver": trip.driver_name or trip.driver_id,
            "route": f"{trip.origin} -> {trip.destination}",
            "score": r.score,
            **r.factors.model_dump(),
        })
    df = pd.DataFrame(rows).set_index("trip")
    st.dataframe(df, use_container_width=True)

    for position, r in enumerate(results, 1):
        trip = by_id[r.trip_id]
        with st.expander(f"#{position}: {trip.origin} -> {trip.destination} — {r.label} ({r.score})"):
            cols = st.columns(5)
            cols[0].metric("Route", r.factors.route)
            cols[1].metric("Preferences", r.factors.preferences)
            cols[2].metric("Rating", r.factors.rating)
            cols[3].metric("Price", r.factors.price)
            cols[4].metric("Timing", r.factors.timing)
            st.caption(
                f"{trip.trip_type.value} · departs {trip.departure:%Y-%m-%d %H:%M} UTC · "
                f"{trip.price_per_seat:g} per seat · {trip.remaining_seats} seat(s) left"
            )
            for reason in r.reasons:
                st.markdown(f"- {reason}")


def _run(intent: SearchIntent, trips: list[TripCandidate], now: dt.datetime) -> None:
    results = TripRanker(settings.ranking).rank(intent, trips, now=now, limit=settings.top_k)
    _render_results(results, trips)


# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------

with st.sidebar:
    st.header("Settings")
    as_of_date = st.date_input("Evaluate as of (date)", value=SAMPLE_NOW.date())
    as_of_time = st.time_input("Evaluate as of (UTC time)", value=SAMPLE_NOW.time())
    st.markdown("---")
    w = settings.ranking.weights
    st.caption(
        f"Weights: route {w.route:.2f} · preferences {w.preferences:.2f} · "
        f"rating {w.rating:.2f} · price {w.price:.2f} · timing {w.timing:.2f}"
    )

now = dt.datetime.combine(as_of_date, as_of_time, tzinfo=dt.timezone.utc)


# ---------------------------------------------------------------------------
# Main tabs
# ---------------------------------------------------------------------------

tab_sample, tab_upload = st.tabs(["Sample Trips", "Upload JSON"])

# --- Tab 1: Sample Trips ---
with tab_sample:
    st.subheader("Rank the built-in sample trips")
    sample_trips = load_sample_trips()
    st.caption(f"{len(sample_trips)} trips loaded (including cancelled, full and own trips).")
    intent = _search_form(load_sample_search())
    if intent:
        _run(intent, sample_trips, now)


# --- Tab 2: Upload JSON ---
with tab_upload:
    st.subheader("Rank your own trips")
    st.markdown(_UPLOAD_HELP)
    uploaded = st.file_uploader("Upload JSON", type=["json"])
    if uploaded:
        try:
            raw = json.loads(uploaded.read())
            trips = load_trips_from_json(raw)
            st.success(f"Loaded {len(trips)} trips")
            if st.button("Rank against sample search", key="run_upload", type="primary"):
                _run(load_sample_search(), trips, now)
        except Exception as e:
            st.error(f"Error loading JSON: {e}")
