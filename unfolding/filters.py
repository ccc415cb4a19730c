import streamlit as st

from unfolding.catalog import group_by_category
from unfolding.lines import AVAILABLE_LINES
from unfolding.model import CATEGORY_LABELS, Characteristic


def line_selector(label: str = "Metro line"):
    if st.session_state.get("line") not in AVAILABLE_LINES:
        st.session_state["line"] = AVAILABLE_LINES[0]

    st.sidebar.selectbox(
        label,
        options=AVAILABLE_LINES,
        key="line",
    )


def characteristic_selector(characteristics: list[Characteristic]):
    grouped = group_by_category(characteristics)
    if not grouped:
        st.sidebar.caption("No characteristic available for this line.")
        st.session_state["characteristic"] = ""
        return

    # Keep the previous choice when the new line carries it too
    current = st.session_state.get("characteristic")
    by_key = {c.key: c for c in characteristics}
    if st.session_state.get("category") not in grouped:
        st.session_state["category"] = by_key[current].category if current in by_key else next(iter(grouped))

    st.sidebar.selectbox(
        "Category",
        options=list(grouped),
        key="category",
        format_func=lambda cat: CATEGORY_LABELS.get(cat, cat),
    )

    options = [c.key for c in grouped[st.session_state["category"]]]
    if st.session_state.get("characteristic") not in options:
        st.session_state["characteristic"] = options[0]

    st.sidebar.selectbox(
        "Characteristic",
        options=options,
        key="characteristic",
        format_func=lambda key: by_key[key].label,
    )


def stations_only_toggle():
    st.sidebar.checkbox("Show stations only (hide intermediate points)", key="stations_only")


def dq_sidebar():
    st.sidebar.header("Data Quality Tools")
    line_selector()


def intro_sidebar():
    st.sidebar.header("How to use this app")
    st.sidebar.info("Pick a line and a characteristic in the Line Explorer page.")
