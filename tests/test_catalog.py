"""
Unit tests for the characteristic catalog.

Tests cover:
- Known / unknown key filtering
- Categories and units
- Display names and their fallback
- Sorting and grouping
"""
import pytest

from unfolding.catalog import (
    KNOWN_CHARACTERISTICS,
    find_characteristic,
    format_field_name,
    get_characteristics,
    group_by_category,
    unit_for,
)
from unfolding.model import CATEGORY_LABELS, Characteristic, Record


def _record(**values) -> Record:
    return Record.from_row({"ID_int": 1, "line": "METRO 1", "name_station": "Bérault", **values})


# ============================================================
# Catalog Building Tests
# ============================================================

class TestGetCharacteristics:
    """Tests for deriving the catalog from a sample record."""

    def test_unknown_keys_are_excluded(self):
        """Only keys of the static table become characteristics."""
        chars = get_characteristics(_record(elevation=40.0, unknown_field="x", poi_bakery=3.0))

        assert [c.key for c in chars] == ["poi_bakery", "elevation"]
        bakery, elevation = chars
        assert (bakery.name, bakery.category, bakery.unit) == ("Bakery", "businesses", "per km²")
        assert (elevation.name, elevation.category, elevation.unit) == ("Elevation", "environment", "m")

    def test_fixed_fields_are_never_characteristics(self):
        assert get_characteristics(_record()) == []

    def test_accepts_plain_mapping(self):
        chars = get_characteristics({"noise": 55, "city_trees": 120})
        assert [c.key for c in chars] == ["noise", "city_trees"]

    def test_sorted_by_display_name_ignoring_case(self):
        chars = get_characteristics({
            "poi_restaurant": 1, "census_income": 1, "poi_bar": 1, "historical_food_1829": 1,
        })
        names = [c.name for c in chars]
        assert names == ["Average income", "Bar", "Food shops (1829)", "Restaurant"]

    def test_sample_line(self, line_frame):
        sample = Record.from_row(line_frame.iloc[0].to_dict())
        keys = {c.key for c in get_characteristics(sample)}
        assert keys == {"elevation", "noise", "poi_bakery", "census_income"}

    def test_is_deterministic(self):
        sample = _record(noise=1.0, elevation=2.0)
        assert get_characteristics(sample) == get_characteristics(sample)


# ============================================================
# Static Table Tests
# ============================================================

class TestKnownCharacteristics:

    def test_every_category_is_known(self):
        assert {spec.category for spec in KNOWN_CHARACTERISTICS.values()} == set(CATEGORY_LABELS)

    def test_historical_directories(self):
        hist = [k for k in KNOWN_CHARACTERISTICS if k.startswith("historical_")]
        assert len(hist) == 20
        assert KNOWN_CHARACTERISTICS["historical_luxury_1885"].name == "Luxury shops (1885)"
        assert KNOWN_CHARACTERISTICS["historical_luxury_1885"].category == "culture"

    def test_table_size(self):
        assert len(KNOWN_CHARACTERISTICS) == 59

    @pytest.mark.parametrize("key, unit", [
        ("poi_cafe", "per km²"),
        ("city_velib", "per km²"),
        ("historical_food_1840", "per km²"),
        ("census_share_0_18", "%"),
        ("census_share_poor", "%"),
        ("census_built_b1945", "%"),
        ("housing_price", "€/m²"),
        ("noise", "dB"),
        ("elevation", "m"),
        ("census_density", "people/km²"),
        ("census_income", "€/year"),
        ("something_else", None),
    ])
    def test_units(self, key, unit):
        assert unit_for(key) == unit


class TestFormatFieldName:

    @pytest.mark.parametrize("key, name", [
        ("density_bike_shop", "Bike shop"),
        ("hhshare_owner", "HH: owner"),
        ("indshare_students", "Pop: students"),
        ("green_space", "Green space"),
        ("", ""),
    ])
    def test_fallback_names(self, key, name):
        assert format_field_name(key) == name

    def test_only_first_letter_is_capitalised(self):
        assert format_field_name("tall_TREES") == "Tall TREES"


# ============================================================
# Grouping Tests
# ============================================================

class TestGroupByCategory:

    def test_groups_in_category_order(self):
        chars = get_characteristics({"poi_bar": 1, "elevation": 1, "census_income": 1, "noise": 1})
        grouped = group_by_category(chars)

        assert list(grouped) == ["environment", "economy", "businesses"]
        assert [c.key for c in grouped["environment"]] == ["noise", "elevation"]

    def test_empty(self):
        assert group_by_category([]) == {}

    def test_find_characteristic(self):
        chars = [Characteristic("noise", "Average noise", "environment", "dB")]
        assert find_characteristic(chars, "noise").label == "Average noise (dB)"
        assert find_characteristic(chars, "elevation") is None
