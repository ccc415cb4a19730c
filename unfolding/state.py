import asyncio
import logging

import streamlit as st

import constants
from unfolding.io import LoadError
from unfolding.loading import LineDataset, LineLoader

logger = logging.getLogger(__name__)


def init_state():
    defaults = {
        # Line selector
        "line": constants.DEFAULT_LINE,

        # Characteristic selector ("" until a dataset is loaded)
        "category": "",
        "characteristic": "",

        # Hide intermediate points
        "stations_only": False,

        # Last loaded LineDataset, or (line, message) when loading failed
        "dataset": None,
        "load_error": None,
    }
    for k, v in defaults.items():
        st.session_state.setdefault(k, v)
    if "line_loader" not in st.session_state:
        st.session_state["line_loader"] = LineLoader()


def ensure_dataset(line: str) -> LineDataset | None:
    """
    Dataset of ``line``, loading it when the selection changed.

    Returns None when loading failed; the reason is kept in
    ``st.session_state["load_error"]``.
    """
    init_state()
    ds = st.session_state["dataset"]
    if ds is not None and ds.line == line:
        return ds
    err = st.session_state["load_error"]
    if err is not None and err[0] == line:
        return None

    loader: LineLoader = st.session_state["line_loader"]
    try:
        with st.spinner(f"Loading {line} data..."):
            ds = asyncio.run(loader.load(line))
    except LoadError as e:
        logger.error(f"Error loading {line}: {e}")
        st.session_state["dataset"] = None
        st.session_state["load_error"] = (line, str(e))
        return None

    if ds is None:
        # superseded by a newer selection; only a dataset of this line may be shown
        current = st.session_state["dataset"]
        return current if current is not None and current.line == line else None
    st.session_state["dataset"] = ds
    st.session_state["load_error"] = None
    return ds
