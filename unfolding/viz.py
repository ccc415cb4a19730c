import plotly.graph_objects as go
import pandas as pd

from unfolding.lines import chart_line_name
from unfolding.model import is_station_name

BACKGROUND = "#1e3a5f"
GRID = "#3a5a7f"
STATION_LINE = "#5a7a9f"
STATION_LABEL = "#a0c0e0"
AVERAGE_COLOR = "#FF6B6B"


def theme():
    return {"template": "plotly_dark", "height": 500}


def chart_title(name: str, line: str) -> str:
    return f"{name} along {chart_line_name(line)}"


def line_profile_chart(
    series: pd.DataFrame,
    smoothed: pd.DataFrame,
    stations: pd.DataFrame,
    average: float | None,
    *,
    name: str,
    line: str,
    color: str,
    unit: str | None = None,
    stations_only: bool = False,
):
    """
    Characteristic plotted against distance along the line:
      - raw values (bars when only stations are shown, thin line otherwise;
        bigger markers on stations)
      - smoothed trend as a thick line
      - dashed vertical line + tilted label per station
      - dashed horizontal line at the line-wide average
    """
    cfg = theme()
    unit_sfx = f" {unit}" if unit else ""
    hover = "<b>%{customdata}</b><br>Distance: %{x:.2f} km<br>" + name + ": <b>%{y:.2f}</b>" + unit_sfx + "<extra></extra>"
    labels = series["name"].fillna("Intermediate point") if not series.empty else []

    fig = go.Figure()
    if stations_only:
        fig.add_trace(go.Bar(
            x=series["distance"], y=series["value"], customdata=labels,
            marker_color=color, opacity=0.6, name=f"{name} (actual)",
            hovertemplate=hover,
        ))
    else:
        sizes = [12 if is_station_name(n) else 4 for n in series["name"]] if not series.empty else []
        fig.add_trace(go.Scatter(
            x=series["distance"], y=series["value"], customdata=labels,
            mode="lines+markers", line=dict(color=color, width=1.5), opacity=0.6,
            marker=dict(size=sizes, color=color), name=f"{name} (actual)",
            hovertemplate=hover,
        ))

    fig.add_trace(go.Scatter(
        x=smoothed["distance"], y=smoothed["value"],
        customdata=smoothed["name"].fillna("Intermediate point") if not smoothed.empty else [],
        mode="lines", line=dict(color=color, width=4), name=f"{name} (smoothed)",
        hovertemplate=hover,
    ))

    for _, st_row in stations.iterrows():
        fig.add_vline(x=st_row["distance"], line_dash="dash", line_width=1, line_color=STATION_LINE)
        fig.add_annotation(
            x=st_row["distance"], yref="paper", y=0, yshift=-10,
            text=st_row["name"], textangle=15, showarrow=False,
            xanchor="left", yanchor="top", font=dict(size=11, color=STATION_LABEL),
        )

    if average is not None:
        fig.add_hline(y=average, line_dash="dash", line_width=2, line_color=AVERAGE_COLOR)
        fig.add_annotation(
            xref="paper", x=1, y=average, yref="y",
            text=f"<b>Average: {average:.2f}</b>", showarrow=False,
            xanchor="right", yanchor="bottom", font=dict(size=13, color=AVERAGE_COLOR),
        )

    fig.update_layout(
        template=cfg["template"], height=cfg["height"],
        title=chart_title(name, line), showlegend=False,
        paper_bgcolor=BACKGROUND, plot_bgcolor=BACKGROUND,
        margin=dict(l=60, r=40, t=60, b=140),
    )
    fig.update_xaxes(title="Distance to origin (West-East, or South-North orientation)", gridcolor=GRID)
    fig.update_yaxes(title=f"{name} ({unit})" if unit else name, gridcolor=GRID)
    return fig
