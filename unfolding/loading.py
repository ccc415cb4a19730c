"""
Line switching with last-selection-wins semantics.

Each call to ``LineLoader.load`` takes a ticket. When the fetch completes,
the result is only handed back if no newer call was made in the meantime;
otherwise it is dropped, so a slow response for an old line never replaces
the data of the line the user picked last.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional

import pandas as pd

from unfolding.catalog import get_characteristics
from unfolding.io import LoadError, fetch_line_frame, records_from_frame
from unfolding.model import Characteristic

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], Awaitable[pd.DataFrame]]


@dataclass(frozen=True, eq=False)
class LineDataset:
    """A fully loaded line: its points and the characteristics they carry."""
    line: str
    frame: pd.DataFrame
    characteristics: list[Characteristic] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return self.frame.empty


class LineLoader:
    def __init__(self, fetch: Optional[Fetcher] = None):
        self._fetch = fetch or fetch_line_frame
        self._ticket = 0

    async def load(self, line: str) -> Optional[LineDataset]:
        """
        Fetch ``line`` and derive its catalog.

        Returns:
            The dataset, or None when a newer ``load`` superseded this one

        Raises:
            LoadError: the fetch failed and this call is still the latest
        """
        self._ticket += 1
        ticket = self._ticket
        logger.info(f"Loading {line} (request #{ticket})")

        try:
            frame = await self._fetch(line)
        except LoadError as e:
            if ticket != self._ticket:
                logger.info(f"Ignoring failure of superseded request #{ticket} for {line}: {e}")
                return None
            raise

        if ticket != self._ticket:
            logger.info(f"Discarding stale result of request #{ticket} for {line}")
            return None

        characteristics = []
        if not frame.empty:
            sample = records_from_frame(frame.head(1))[0]
            characteristics = get_characteristics(sample)
        logger.info(f"{line}: {len(frame)} points, {len(characteristics)} characteristics")
        return LineDataset(line=line, frame=frame, characteristics=characteristics)
