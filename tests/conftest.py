"""
Shared pytest fixtures for all tests.

This module provides:
- A small line CSV mixing stations and intermediate points
- The parsed frame of that CSV
- A writable data directory holding it as METRO 1
"""
import pytest
import pandas as pd

from unfolding.io import parse_line_csv


# ============================================================
# Sample Data Fixtures
# ============================================================

SAMPLE_CSV = """ID_int,line,branch,name_station,longitude_int,latitude_int,rank_station,rank_intermediate,cumul_distance,distance_origin,elevation,noise,poi_bakery,census_income,unknown_field
1,METRO 1,0,La Défense,2.238,48.892,1,0,0.0,0.0,35,62.5,12,41000,a
2,METRO 1,0,,2.245,48.889,1,1,0.3,0.3,34,-9999,8,-9999,b
3,METRO 1,0,,2.252,48.886,1,2,0.6,0.6,33,60.1,10,39000,c
4,METRO 1,0,Esplanade de La Défense,2.259,48.883,2,0,0.9,0.9,-9999,58.0,14,40000,d
5,METRO 1,0,  ,2.266,48.880,2,1,1.2,1.2,31,57.2,6,38000,e
6,METRO 1,0,Pont de Neuilly,2.273,48.877,3,0,1.5,1.5,30,59.9,9,42000,f
7,METRO 1,0,,2.280,48.874,3,1,1.8,1.8,29,61.3,11,43000,g
"""


@pytest.fixture
def sample_csv() -> str:
    return SAMPLE_CSV


@pytest.fixture
def line_frame(sample_csv) -> pd.DataFrame:
    """Parsed sample line: 7 points, 3 stations."""
    return parse_line_csv(sample_csv)


@pytest.fixture
def data_dir(tmp_path, sample_csv):
    """Data folder with the sample saved as METRO 1's file."""
    (tmp_path / "final_M1.csv").write_text(sample_csv, encoding="utf-8")
    return tmp_path


def make_frame(values, names=None, key="elevation") -> pd.DataFrame:
    """Frame with one characteristic column, distances 0, 1, 2, ..."""
    n = len(values)
    return pd.DataFrame({
        "ID_int": range(1, n + 1),
        "name_station": names if names is not None else [None] * n,
        "cumul_distance": [float(i) for i in range(n)],
        key: values,
    })


@pytest.fixture
def frame_factory():
    return make_frame
