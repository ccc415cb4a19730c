from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

CATEGORY_LABELS = {
    "environment": "Geography & environment",
    "economy": "Housing, economy & demographics",
    "infrastructure": "City services",
    "businesses": "Points of interest",
    "culture": "Historical (trade directories)",
}

# Columns every line file carries; everything else is a characteristic value
FIXED_FIELDS = (
    "ID_int", "line", "branch", "name_station",
    "longitude_int", "latitude_int",
    "rank_station", "rank_intermediate", "cumul_distance",
)


def is_station_name(value: Any) -> bool:
    """A point is a station when its name is text that is not blank once stripped."""
    return isinstance(value, str) and value.strip() != ""


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def _as_int(value: Any) -> Optional[int]:
    if _is_missing(value) or isinstance(value, str):
        return None
    return int(value)


def _as_float(value: Any) -> Optional[float]:
    if _is_missing(value) or isinstance(value, str):
        return None
    return float(value)


def _as_value(value: Any) -> float | str | None:
    if _is_missing(value):
        return None
    if isinstance(value, str):
        return value
    return float(value)


@dataclass(frozen=True)
class Record:
    """One observation along a line: a named station or an intermediate point."""
    id: Optional[int]
    line: str
    branch: Optional[int]
    name_station: Optional[str]
    longitude: Optional[float]
    latitude: Optional[float]
    rank_station: Optional[int]
    rank_intermediate: Optional[int]
    cumul_distance: Optional[float]
    values: dict[str, float | str | None] = field(default_factory=dict)

    @property
    def is_station(self) -> bool:
        return is_station_name(self.name_station)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Record:
        name = row.get("name_station")
        return cls(
            id=_as_int(row.get("ID_int")),
            line="" if _is_missing(row.get("line")) else str(row.get("line")),
            branch=_as_int(row.get("branch")),
            name_station=name if isinstance(name, str) else None,
            longitude=_as_float(row.get("longitude_int")),
            latitude=_as_float(row.get("latitude_int")),
            rank_station=_as_int(row.get("rank_station")),
            rank_intermediate=_as_int(row.get("rank_intermediate")),
            cumul_distance=_as_float(row.get("cumul_distance")),
            values={k: _as_value(v) for k, v in row.items() if k not in FIXED_FIELDS},
        )


@dataclass(frozen=True)
class Characteristic:
    key: str
    name: str
    category: str
    unit: Optional[str] = None

    @property
    def label(self) -> str:
        return f"{self.name} ({self.unit})" if self.unit else self.name
