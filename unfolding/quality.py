import pandas as pd
import numpy as np

import constants
from unfolding.compute import DISTANCE_COLUMNS, is_number, calculate_average
from unfolding.model import Characteristic


def characteristic_coverage(df: pd.DataFrame, characteristics: list[Characteristic]) -> pd.DataFrame:
    cols = ["key", "characteristic", "category", "valid_count", "missing_count", "missing_pct", "min", "max", "average"]
    if df.empty or not characteristics:
        return pd.DataFrame(columns=cols)

    rows = []
    n = len(df)
    for c in characteristics:
        s = df[c.key] if c.key in df.columns else pd.Series(np.nan, index=df.index)
        numeric = s.map(is_number).astype(bool)
        vals = s[numeric].astype(float)
        vals = vals[vals.notna() & (vals != constants.MISSING_SENTINEL)]
        valid = len(vals)
        rows.append({
            "key": c.key,
            "characteristic": c.label,
            "category": c.category,
            "valid_count": valid,
            "missing_count": n - valid,
            "missing_pct": round((n - valid) / n * 100, 2),
            "min": vals.min() if valid else np.nan,
            "max": vals.max() if valid else np.nan,
            "average": calculate_average(df, c.key),
        })
    out = pd.DataFrame(rows, columns=cols)
    return out.sort_values(["missing_pct", "key"], ascending=[False, True]).reset_index(drop=True)


def text_in_numeric(df: pd.DataFrame, characteristics: list[Characteristic]) -> pd.DataFrame:
    """Cells of characteristic columns that hold text instead of a number."""
    if df.empty:
        return pd.DataFrame(columns=["row_id", "column", "value"])

    issues = []
    for c in characteristics:
        if c.key not in df.columns or pd.api.types.is_numeric_dtype(df[c.key]):
            continue
        for idx, v in df[c.key].items():
            if isinstance(v, str):
                issues.append({"row_id": int(idx), "column": c.key, "value": v})
    return pd.DataFrame(issues, columns=["row_id", "column", "value"])


def distance_order_issues(df: pd.DataFrame) -> pd.DataFrame:
    """Rows whose distance from the origin is negative or smaller than the previous row's."""
    col = next((c for c in DISTANCE_COLUMNS if c in df.columns), None)
    if df.empty or col is None:
        return pd.DataFrame(columns=["row_id", "rule", "details"])

    rules = []
    d = pd.to_numeric(df[col], errors="coerce")
    prev = d.shift(1)
    for idx in df.index:
        v, p = d[idx], prev[idx]
        if pd.notna(v) and v < 0:
            rules.append({"row_id": int(idx), "rule": f"{col} ≥ 0 violated", "details": f"{v}"})
        if pd.notna(v) and pd.notna(p) and v < p:
            rules.append({"row_id": int(idx), "rule": f"{col} non-decreasing violated", "details": f"{v} < {p}"})
    return pd.DataFrame(rules, columns=["row_id", "rule", "details"])
