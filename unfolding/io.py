from __future__ import annotations

import asyncio
import io
import logging
from pathlib import Path

import numpy as np
import pandas as pd
import requests

import constants
from unfolding.lines import line_file
from unfolding.model import Record

logger = logging.getLogger(__name__)


class LoadError(Exception):
    """A line's data could not be retrieved or is not a usable CSV."""
    pass


def _infer_column(s: pd.Series) -> pd.Series:
    """
    Numeric-looking cells become numbers, blank cells become NaN, other text
    stays as it is. A column with no text left over gets a numeric dtype.
    """
    s = s.astype(object).where(s.notna(), "")
    stripped = s.str.strip()
    filled = stripped != ""
    num = pd.to_numeric(stripped.where(filled), errors="coerce")
    # "inf", "Infinity" and friends stay text
    num = num.where(np.isfinite(num.astype(float)))
    if not filled.any():
        return num.astype(float)
    if num[filled].notna().all():
        return num
    if num[filled].isna().all():
        return s.where(filled, np.nan)
    # Mixed column: keep each cell's own type
    out = s.where(filled, np.nan)
    is_num = num.notna()
    out[is_num] = num[is_num].astype(object)
    return out


def _read_csv(text: str, **kwargs) -> pd.DataFrame:
    return pd.read_csv(io.StringIO(text), dtype=str, keep_default_na=False, skip_blank_lines=True, **kwargs)


def parse_line_csv(text: str) -> pd.DataFrame:
    """Parse a line file. Rows keep their order; malformed rows are kept rather than dropped."""
    text = text.lstrip("\ufeff") if text else text
    if not text or not text.strip():
        raise LoadError("Empty resource: no header row")

    try:
        header = _read_csv(text, nrows=0).columns
        if all(str(h).startswith("Unnamed:") for h in header):
            raise LoadError("Header row has no field names")
        n_cols = len(header)
        # Short rows come back padded; long rows lose their surplus cells
        df = _read_csv(text, engine="python", index_col=False, on_bad_lines=lambda row: row[:n_cols])
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise LoadError(f"Could not parse CSV: {e}") from e

    df.columns = [str(c).strip() for c in df.columns]
    for col in df.columns:
        df[col] = _infer_column(df[col])

    if df.empty:
        logger.warning("CSV has a header but no data rows")
    return df.reset_index(drop=True)


def _read_local(path: Path) -> str:
    if not path.exists():
        raise LoadError(f"Data file not found: {path.resolve()}")
    try:
        return path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(f"Could not read {path}: {e}") from e


def _read_remote(url: str) -> str:
    try:
        response = requests.get(url, timeout=constants.DOWNLOAD_TIMEOUT)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        raise LoadError(f"Could not download {url}: {e}") from e
    try:
        return response.content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise LoadError(f"{url} is not UTF-8 text: {e}") from e


async def fetch_line_frame(
    line: str,
    *,
    base_url: str | None = None,
    data_dir: str | Path | None = None,
) -> pd.DataFrame:
    """
    Load one line's dataset.

    Downloads ``<base_url>/<file>.csv`` when a base URL is given (or configured
    in ``constants.DATA_BASE_URL``), otherwise reads ``<data_dir>/<file>.csv``.
    The blocking read runs in a worker thread so the caller only awaits it.

    Raises:
        LoadError: unknown line, fetch failure or unusable CSV
    """
    try:
        name = line_file(line)
    except KeyError as e:
        raise LoadError(f"Unknown line: {line!r}") from e

    base_url = constants.DATA_BASE_URL if base_url is None else base_url
    if base_url:
        source = f"{base_url.rstrip('/')}/{name}.csv"
        text = await asyncio.to_thread(_read_remote, source)
    else:
        source = Path(data_dir or constants.DATA_DIR) / f"{name}.csv"
        text = await asyncio.to_thread(_read_local, source)

    logger.info(f"Fetched {line} from {source}")
    df = parse_line_csv(text)
    logger.info(f"Parsed {len(df)} points for {line}")
    return df


def records_from_frame(df: pd.DataFrame) -> list[Record]:
    return [Record.from_row(row) for row in df.to_dict(orient="records")]
