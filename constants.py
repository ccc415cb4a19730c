import os
from pathlib import Path

# Folder holding one CSV per line (final_M1.csv, final_RA.csv, ...)
DATA_DIR = Path(os.environ.get("UNFOLDING_DATA_DIR", "data"))

# Optional remote folder serving the same CSV files; local files are used when empty
DATA_BASE_URL = os.environ.get("UNFOLDING_DATA_BASE_URL", "")

# Reserved value meaning "not available" in every characteristic column
MISSING_SENTINEL = -9999

# Centered moving average width for the trend line
SMOOTHING_WINDOW = 5

# Line shown on first visit
DEFAULT_LINE = "METRO 1"

# Seconds before a data download is abandoned
DOWNLOAD_TIMEOUT = 30

LOG_LEVEL = os.environ.get("UNFOLDING_LOG_LEVEL", "INFO")
