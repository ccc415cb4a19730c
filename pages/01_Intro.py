import streamlit as st

from unfolding.filters import intro_sidebar
from unfolding.model import CATEGORY_LABELS

st.set_page_config(page_title="Intro & Context", page_icon=":material/subway:", layout="wide")

# Page-specific sidebar
intro_sidebar()

st.write("# Introduction & Context")

st.markdown(
    """
Riding a metro line from one end to the other crosses very different neighbourhoods.
This dashboard **unfolds** each Paris metro and RER line into a straight axis, the distance from
its origin, and shows how a characteristic of the surrounding city changes along the way.
    """
)

st.divider()

st.subheader("What is measured")
st.markdown(
    """
Each line is sampled at its **stations** and at **intermediate points** between them.
At every point, dozens of characteristics are available, grouped in five families:
"""
)
st.markdown("\n".join(f"- **{label}**" for label in CATEGORY_LABELS.values()))

st.subheader("How to read the charts")
st.markdown(
    """
1. **Pick a line** and a **characteristic** in the *Line Explorer* sidebar.
2. The thin line shows the raw values; the thick one is a **moving average over 5 points**.
3. The dashed red line is the **average along the line**, a reference to spot the stretches above or below it.
4. Tick *Show stations only* to compare stations alone, without the intermediate points.
"""
)

st.subheader("Data conventions")
st.markdown(
    """
- Distances are counted from the line's origin (West→East, or South→North).
- A value of **-9999** means *not available* and is never plotted or averaged.
- Densities (points of interest, city services, trade directories) are given **per km²**.
"""
)
