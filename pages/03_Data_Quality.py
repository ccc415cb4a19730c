import streamlit as st
import plotly.express as px

from unfolding.filters import dq_sidebar
from unfolding.model import CATEGORY_LABELS
from unfolding.quality import (
    characteristic_coverage,
    distance_order_issues,
    text_in_numeric,
)
from unfolding.state import ensure_dataset

# Helpers
def analysis_card(title: str, body_md: str, icon: str = ":material/analytics:"):
    with st.container(border=True):
        st.markdown(f"{icon} **{title}**")
        st.markdown(body_md)

st.set_page_config(page_title="Data Quality", page_icon=":material/award_star:", layout="wide")
dq_sidebar()

st.markdown("# Data Quality")
st.caption("How complete and consistent the selected line's file is.")

line = st.session_state["line"]
dataset = ensure_dataset(line)
if dataset is None:
    err = st.session_state.get("load_error")
    st.error(f"No data available for {line}: {err[1] if err else 'unknown error'}")
    st.stop()
if dataset.empty:
    st.warning(f"The data file for {line} has no points.")
    st.stop()

df = dataset.frame

analysis_card(
    "Conventions",
    """
- Every characteristic uses **-9999** for "not available"; those cells are left out of averages and charts.
- Cells holding text in a numeric column are kept in the dataset but never plotted.
- Points must be ordered by **distance from the origin**, which can never decrease.
""",
    icon=":material/info:",
)

# ---------- Coverage ----------
st.subheader("Coverage by characteristic")
cov = characteristic_coverage(df, dataset.characteristics)
if cov.empty:
    st.info("No known characteristic in this file.")
else:
    c1, c2, c3 = st.columns(3)
    c1.metric("Points", f"{len(df)}")
    c2.metric("Characteristics", f"{len(cov)}")
    c3.metric("Fully covered", f"{int((cov['missing_count'] == 0).sum())}")

    fig = px.bar(
        cov.assign(category=cov["category"].map(CATEGORY_LABELS)),
        x="missing_pct", y="characteristic", color="category", orientation="h",
        title="Share of points without a value",
    )
    fig.update_layout(template="plotly_white", height=max(380, 18 * len(cov)), legend_title_text="Category")
    fig.update_xaxes(title=None, ticksuffix=" %", range=[0, 100])
    fig.update_yaxes(title=None, autorange="reversed")
    st.plotly_chart(fig, use_container_width=True)

    st.dataframe(
        cov.drop(columns=["key"]).rename(columns={
            "characteristic": "Characteristic", "category": "Category",
            "valid_count": "Values", "missing_count": "Missing count",
            "missing_pct": "Missing %", "min": "Min", "max": "Max", "average": "Average",
        }),
        use_container_width=True, hide_index=True,
    )

# ---------- Consistency ----------
st.subheader("Consistency checks")
left, right = st.columns(2)
with left:
    st.markdown("**Text found in characteristic columns**")
    txt = text_in_numeric(df, dataset.characteristics)
    if txt.empty:
        st.success("Every characteristic cell is numeric or empty.")
    else:
        st.dataframe(txt, use_container_width=True, hide_index=True)
with right:
    st.markdown("**Distance ordering**")
    order = distance_order_issues(df)
    if order.empty:
        st.success("Distances are non-negative and never decrease.")
    else:
        st.dataframe(order, use_container_width=True, hide_index=True)
