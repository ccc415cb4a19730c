import logging

import streamlit as st

# Import project modules
from unfolding.state import init_state
import constants

# Configure logging
logging.basicConfig(
    level=getattr(logging, constants.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

# Page config
st.set_page_config(
    page_title="Unfolding metro lines",
    page_icon=":material/subway:",
    layout="wide",
)

# Initialize Session State
init_state()

# Pages navigation
pg = st.navigation([
    st.Page("pages/01_Intro.py",         title="Intro & Context", icon=":material/subway:"),
    st.Page("pages/02_Line_Explorer.py", title="Line Explorer",   icon=":material/timeline:", default=True),
    st.Page("pages/03_Data_Quality.py",  title="Data Quality",    icon=":material/award_star:"),
])

# Run the selected page
pg.run()
