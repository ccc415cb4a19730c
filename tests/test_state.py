"""
Unit tests for the session-level dataset cache.

Tests cover:
- Reloading only when the selected line changes
- Failures kept per line until the user retries
- Loaded-but-empty datasets kept apart from failures
- Superseded loads never showing another line's data
"""
import pytest
import pandas as pd
from unittest.mock import MagicMock

from unfolding import state
from unfolding.io import LoadError
from unfolding.loading import LineDataset, LineLoader


@pytest.fixture
def session(monkeypatch):
    """Streamlit replaced by a mock whose session state is a plain dict."""
    fake_st = MagicMock()
    fake_st.session_state = {}
    monkeypatch.setattr(state, "st", fake_st)
    return fake_st.session_state


class CountingFetch:
    def __init__(self, frames: dict[str, pd.DataFrame], errors: dict[str, Exception] | None = None):
        self.frames = frames
        self.errors = errors or {}
        self.calls: list[str] = []

    async def __call__(self, line: str) -> pd.DataFrame:
        self.calls.append(line)
        if line in self.errors:
            raise self.errors[line]
        return self.frames[line]


class SupersededLoader:
    """Loader whose every request has been overtaken by a newer one."""

    async def load(self, line):
        return None


# ============================================================
# Caching Tests
# ============================================================

class TestEnsureDataset:

    def test_loads_once_per_line(self, session, line_frame):
        fetch = CountingFetch({"METRO 1": line_frame, "RER A": line_frame.head(2)})
        session["line_loader"] = LineLoader(fetch)

        first = state.ensure_dataset("METRO 1")
        again = state.ensure_dataset("METRO 1")
        other = state.ensure_dataset("RER A")

        assert first is again
        assert other.line == "RER A"
        assert fetch.calls == ["METRO 1", "RER A"]
        assert session["dataset"] is other

    def test_failure_is_kept_until_retry(self, session, line_frame):
        fetch = CountingFetch({"METRO 1": line_frame}, errors={"METRO 1": LoadError("Data file not found")})
        session["line_loader"] = LineLoader(fetch)

        assert state.ensure_dataset("METRO 1") is None
        assert session["load_error"] == ("METRO 1", "Data file not found")
        assert state.ensure_dataset("METRO 1") is None
        assert fetch.calls == ["METRO 1"]

        # Retry clears the stored failure; the next call fetches again
        fetch.errors.clear()
        session["load_error"] = None
        ds = state.ensure_dataset("METRO 1")

        assert ds.line == "METRO 1"
        assert fetch.calls == ["METRO 1", "METRO 1"]
        assert session["load_error"] is None

    def test_failure_of_one_line_does_not_block_another(self, session, line_frame):
        fetch = CountingFetch({"RER A": line_frame}, errors={"METRO 1": LoadError("timeout")})
        session["line_loader"] = LineLoader(fetch)

        assert state.ensure_dataset("METRO 1") is None
        assert state.ensure_dataset("RER A").line == "RER A"
        assert session["load_error"] is None

    def test_empty_dataset_is_not_a_failure(self, session):
        fetch = CountingFetch({"METRO 2": pd.DataFrame(columns=["ID_int", "elevation"])})
        session["line_loader"] = LineLoader(fetch)

        ds = state.ensure_dataset("METRO 2")

        assert ds is not None
        assert ds.empty
        assert session["load_error"] is None

    def test_superseded_load_keeps_dataset_of_same_line(self, session, line_frame):
        current = LineDataset(line="METRO 1", frame=line_frame)
        session["dataset"] = current
        session["line_loader"] = SupersededLoader()

        # A reload of the same line is served from the cache
        assert state.ensure_dataset("METRO 1") is current

    def test_superseded_load_never_returns_another_line(self, session, line_frame):
        session["dataset"] = LineDataset(line="METRO 1", frame=line_frame)
        session["line_loader"] = SupersededLoader()

        assert state.ensure_dataset("RER A") is None
        assert session["dataset"].line == "METRO 1"

    def test_init_state_defaults(self, session):
        state.init_state()

        assert session["line"] == "METRO 1"
        assert session["stations_only"] is False
        assert isinstance(session["line_loader"], LineLoader)
