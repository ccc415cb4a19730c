import numpy as np
import streamlit as st

from unfolding.catalog import find_characteristic
from unfolding.compute import (
    calculate_average,
    characteristic_series,
    get_stations_only,
    normalize_to_percentile,
    smooth_series,
    station_positions,
)
from unfolding.filters import characteristic_selector, line_selector, stations_only_toggle
from unfolding.lines import contrast_color, line_color, short_label
from unfolding.state import ensure_dataset
from unfolding.viz import line_profile_chart

# ---------- Small helpers ----------
def line_badge(line: str):
    bg = line_color(line)
    st.markdown(
        f"<span style='background:{bg};color:{contrast_color(bg)};padding:4px 12px;"
        f"border-radius:8px;font-weight:600'>{short_label(line)}</span>",
        unsafe_allow_html=True,
    )

def _fmt(v, unit):
    if v is None or (isinstance(v, float) and np.isnan(v)):
        return "—"
    return f"{v:,.2f}{(' ' + unit) if unit else ''}"

# ---------- Page setup ----------
st.set_page_config(page_title="Line Explorer", page_icon=":material/timeline:", layout="wide")
st.sidebar.header("Line Explorer")
line_selector()

st.markdown("# Unfolding metro lines")
st.caption("Explore how neighborhoods change along Paris metro and RER lines.")

line = st.session_state["line"]
dataset = ensure_dataset(line)

# ---------- Load & guardrails ----------
if dataset is None:
    err = st.session_state.get("load_error")
    st.error(f"No data available for {line}: {err[1] if err else 'unknown error'}")
    st.caption("Check that the line CSV files are in the data folder, or that the data URL is reachable.")
    if st.button("Retry"):
        st.session_state["load_error"] = None
        st.rerun()
    st.stop()

characteristic_selector(dataset.characteristics)
stations_only_toggle()

if dataset.empty:
    st.warning(f"The data file for {line} has no points.")
    st.stop()

key = st.session_state.get("characteristic")
selected = find_characteristic(dataset.characteristics, key) if key else None
if selected is None:
    st.info("Choose a characteristic in the sidebar.")
    st.stop()

# ---------- Derived views ----------
df = dataset.frame
stations_only = bool(st.session_state.get("stations_only"))
active = get_stations_only(df) if stations_only else df

average = calculate_average(df, selected.key)
series = characteristic_series(active, selected.key)
smoothed = smooth_series(series)
stations = station_positions(df)

# ---------- Header & KPIs ----------
left, right = st.columns([1, 8], vertical_alignment="center")
with left:
    line_badge(line)
with right:
    st.subheader(selected.label)

c1, c2, c3, c4 = st.columns(4)
c1.metric("Line average", _fmt(average, selected.unit))
c2.metric("Points with a value", f"{len(series)} / {len(active)}")
c3.metric("Stations", f"{len(stations)}")
c4.metric("Last station at", _fmt(stations["distance"].max() if not stations.empty else None, "km"))

# ---------- Chart ----------
if series.empty:
    st.warning(f"{selected.name} is not available along {line}.")
else:
    fig = line_profile_chart(
        series, smoothed, stations, average,
        name=selected.name, line=line, color=line_color(line),
        unit=selected.unit, stations_only=stations_only,
    )
    st.plotly_chart(fig, use_container_width=True)

# ---------- Stations vs the whole line ----------
st_series = characteristic_series(get_stations_only(df), selected.key)
if not st_series.empty:
    line_values = characteristic_series(df, selected.key)["value"].tolist()
    table = st_series.assign(
        percentile=[normalize_to_percentile(v, line_values) for v in st_series["value"]],
    )
    with st.expander("Stations compared with the whole line"):
        st.caption("Percentile: share of the line's points with a lower value.")
        st.dataframe(
            table[["name", "distance", "value", "percentile"]].rename(columns={
                "name": "Station", "distance": "Distance (km)",
                "value": selected.label, "percentile": "Percentile",
            }),
            use_container_width=True, hide_index=True,
        )

with st.popover("How to read this chart"):
    st.markdown(
        """
- The **thin line** shows the raw values, with **larger dots on stations**.
- The **thick line** is a centered moving average over 5 points (fewer near both ends of the line).
- The **dashed red line** is the average over every point of the line, ignoring missing values.
- Dashed vertical lines mark the stations.
        """
    )
