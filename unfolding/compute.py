from __future__ import annotations

import bisect
from typing import Iterable

import numpy as np
import pandas as pd

import constants
from unfolding.model import is_station_name

DISTANCE_COLUMNS = ("distance_origin", "cumul_distance")
SERIES_COLUMNS = ["distance", "value", "name"]


def _distance(df: pd.DataFrame) -> pd.Series:
    for col in DISTANCE_COLUMNS:
        if col in df.columns:
            return pd.to_numeric(df[col], errors="coerce").astype(float)
    return pd.Series(np.nan, index=df.index, dtype=float)


def is_number(v) -> bool:
    return isinstance(v, (int, float, np.integer, np.floating)) and not isinstance(v, (bool, np.bool_))


def _qualifying_mask(df: pd.DataFrame, key: str) -> pd.Series:
    """Cells of ``key`` holding a real number other than the missing sentinel."""
    if df.empty or key not in df.columns:
        return pd.Series(False, index=df.index)
    s = df[key]
    if pd.api.types.is_bool_dtype(s):
        return pd.Series(False, index=df.index)
    if not pd.api.types.is_numeric_dtype(s):
        # text cells of a mixed column fail the numeric check
        numeric = s.map(is_number)
        s = s.where(numeric).astype(float)
    return s.notna() & (s != constants.MISSING_SENTINEL)


def calculate_average(df: pd.DataFrame, key: str) -> float:
    """
    Mean of the numeric values of ``key`` over every point of the line.

    Missing cells, text and the -9999 sentinel are left out. With nothing left
    to average the result is 0.0.
    """
    mask = _qualifying_mask(df, key)
    if not mask.any():
        return 0.0
    return float(df.loc[mask, key].astype(float).mean())


def get_stations_only(df: pd.DataFrame) -> pd.DataFrame:
    if "name_station" not in df.columns:
        return df.iloc[0:0].copy()
    mask = df["name_station"].map(is_station_name).astype(bool)
    return df.loc[mask].copy()


def station_positions(df: pd.DataFrame) -> pd.DataFrame:
    """Distance and name of every station, for labelling the chart."""
    stations = get_stations_only(df)
    return pd.DataFrame({
        "distance": _distance(stations).to_numpy(),
        "name": stations["name_station"].str.strip().to_numpy() if not stations.empty else [],
    })


def characteristic_series(df: pd.DataFrame, key: str) -> pd.DataFrame:
    """Raw (distance, value, name) points of ``key``, sentinel and text values removed."""
    mask = _qualifying_mask(df, key)
    if not mask.any():
        return pd.DataFrame(columns=SERIES_COLUMNS)
    d = df.loc[mask]
    if "name_station" in d.columns:
        names = [n.strip() if is_station_name(n) else None for n in d["name_station"]]
    else:
        names = [None] * len(d)
    return pd.DataFrame({
        "distance": _distance(d).to_numpy(),
        "value": d[key].astype(float).to_numpy(),
        "name": pd.Series(names, dtype=object),
    })


def smooth_series(series: pd.DataFrame, window: int = constants.SMOOTHING_WINDOW) -> pd.DataFrame:
    """
    Centered moving average of ``series["value"]``.

    Each output point averages up to ``window // 2`` neighbours on each side;
    near the ends the window is clipped (smaller, unweighted), never padded.
    Distances and names are copied from the input.
    """
    if window < 1:
        raise ValueError(f"window must be >= 1, got {window}")
    if series.empty:
        return pd.DataFrame(columns=SERIES_COLUMNS)

    half = window // 2
    values = series["value"].astype(float).reset_index(drop=True)
    smoothed = values.rolling(2 * half + 1, center=True, min_periods=1).mean()
    names = [n if is_station_name(n) else None for n in series["name"]]
    return pd.DataFrame({
        "distance": series["distance"].to_numpy(),
        "value": smoothed.to_numpy(),
        "name": pd.Series(names, dtype=object),
    })


def normalize_to_percentile(value: float, values: Iterable[float]) -> float:
    """Share (0-100) of ``values`` strictly below ``value``."""
    ordered = sorted(values)
    if not ordered:
        return 0.0
    idx = bisect.bisect_left(ordered, value)
    return idx / len(ordered) * 100.0
