"""
Catalog of the characteristics a line file can carry.

A single table maps each known column to its category and display name; the
unit is derived from the column name when the table is built, so the three
pieces of metadata can't drift apart.
"""
from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from unfolding.model import CATEGORY_LABELS, Characteristic, Record

_KNOWN = {
    # Geography & environment
    "elevation": ("environment", "Elevation"),
    "noise": ("environment", "Average noise"),

    # Housing, economy & demographics
    "housing_price": ("economy", "Average price per square meter"),
    "census_income": ("economy", "Average income"),
    "census_share_social": ("economy", "Share of social housing"),
    "census_share_0_18": ("economy", "Share of 0-18 individuals"),
    "census_share_18_39": ("economy", "Share of 18-39 individuals"),
    "census_share_40_64": ("economy", "Share of 40-64 individuals"),
    "census_share_65_100": ("economy", "Share of 65+ individuals"),
    "census_built_a1990": ("economy", "Share built after 1990"),
    "census_built_b1945": ("economy", "Share built before 1945"),
    "census_density": ("economy", "Population density"),
    "census_share_poor": ("economy", "Share of poor households"),

    # City services
    "city_fiber": ("infrastructure", "Housing units with fiber"),
    "city_heritage": ("infrastructure", "Heritage buildings"),
    "city_toilets": ("infrastructure", "Public toilets"),
    "city_trees": ("infrastructure", "Trees"),
    "city_velib": ("infrastructure", "Velib stations"),

    # Points of interest
    "poi_bakery": ("businesses", "Bakery"),
    "poi_bank": ("businesses", "Bank"),
    "poi_bar": ("businesses", "Bar"),
    "poi_cafe": ("businesses", "Cafe"),
    "poi_clothes": ("businesses", "Clothes shop"),
    "poi_fastfood": ("businesses", "Fast food"),
    "poi_hairdresser": ("businesses", "Hairdresser"),
    "poi_hotel": ("businesses", "Hotel"),
    "poi_jeweller": ("businesses", "Jeweller"),
    "poi_kindergarten": ("businesses", "Kindergarten"),
    "poi_nightclub": ("businesses", "Nightclub"),
    "poi_pharmacy": ("businesses", "Pharmacy"),
    "poi_playground": ("businesses", "Playground"),
    "poi_police": ("businesses", "Police station"),
    "poi_pub": ("businesses", "Pub"),
    "poi_restaurant": ("businesses", "Restaurant"),
    "poi_school": ("businesses", "School"),
    "poi_supermarket": ("businesses", "Supermarket"),
    "poi_crossing": ("businesses", "Crossing"),
    "poi_parking": ("businesses", "Parking"),
    "poi_lamp": ("businesses", "Street lamp"),
}

# Historical trade directories: one column per trade and directory year
_TRADES = {
    "rentiers": "Rentiers",
    "clothing": "Clothing shops",
    "food": "Food shops",
    "furniture": "Furniture shops",
    "luxury": "Luxury shops",
}
_YEARS = (1829, 1840, 1854, 1885)
for _trade, _label in _TRADES.items():
    for _year in _YEARS:
        _KNOWN[f"historical_{_trade}_{_year}"] = ("culture", f"{_label} ({_year})")

_PER_AREA_PREFIXES = ("poi_", "city_", "historical_")

_EXACT_UNITS = {
    "housing_price": "€/m²",
    "noise": "dB",
    "elevation": "m",
    "census_density": "people/km²",
    "census_income": "€/year",
    "census_built_a1990": "%",
    "census_built_b1945": "%",
    "census_share_poor": "%",
    "census_share_social": "%",
}

_NAME_PREFIXES = (
    ("density_", ""),
    ("hhshare_", "HH: "),
    ("indshare_", "Pop: "),
)


def unit_for(key: str) -> Optional[str]:
    if key.startswith(_PER_AREA_PREFIXES):
        return "per km²"
    if key.startswith("census_share_"):
        return "%"
    return _EXACT_UNITS.get(key)


def format_field_name(key: str) -> str:
    """Fallback display name: 'density_bike_shop' -> 'Bike shop', 'hhshare_rent' -> 'HH: rent'."""
    s = key
    for prefix, label in _NAME_PREFIXES:
        s = s.replace(prefix, label, 1)
    s = s.replace("_", " ")
    return s[:1].upper() + s[1:]


@dataclass(frozen=True)
class CharacteristicSpec:
    category: str
    name: str
    unit: Optional[str]


KNOWN_CHARACTERISTICS = {
    key: CharacteristicSpec(category=cat, name=name or format_field_name(key), unit=unit_for(key))
    for key, (cat, name) in _KNOWN.items()
}


def _sort_key(name: str) -> tuple[str, str]:
    # Case-insensitive, accents folded ("Écoles" sorts with "ecoles")
    folded = "".join(
        c for c in unicodedata.normalize("NFD", name) if unicodedata.category(c) != "Mn"
    )
    return folded.casefold(), name


def get_characteristics(sample: Record | Mapping[str, object]) -> list[Characteristic]:
    """
    Characteristics available in a dataset, judged from one sample record.

    Only keys listed in KNOWN_CHARACTERISTICS are kept; the result is sorted
    by display name.
    """
    keys = sample.values.keys() if isinstance(sample, Record) else sample.keys()
    out = []
    for key in keys:
        spec = KNOWN_CHARACTERISTICS.get(key)
        if spec is None:
            continue
        out.append(Characteristic(key=key, name=spec.name, category=spec.category, unit=spec.unit))
    return sorted(out, key=lambda c: _sort_key(c.name))


def group_by_category(characteristics: Iterable[Characteristic]) -> dict[str, list[Characteristic]]:
    grouped = {cat: [] for cat in CATEGORY_LABELS}
    for c in characteristics:
        grouped.setdefault(c.category, []).append(c)
    return {cat: items for cat, items in grouped.items() if items}


def find_characteristic(characteristics: Iterable[Characteristic], key: str) -> Optional[Characteristic]:
    return next((c for c in characteristics if c.key == key), None)
