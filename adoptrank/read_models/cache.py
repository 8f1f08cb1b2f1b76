from __future__ import annotations

import logging
import threading
import time
from typing import Any

import pandas as pd

from ..analytics.shares import breed_state_shares
from ..dataset.view import DatasetView
from ..scoring.suitability import county_features
from ..scoring.traits import breed_traits

logger = logging.getLogger(__name__)

_TABLES = {
    "county_features": county_features,
    "breed_traits": breed_traits,
    "breed_state_shares": breed_state_shares,
}


class DirectAggregates:
    """Computes every aggregate from the snapshot on each call."""

    def __init__(self, view: DatasetView) -> None:
        self._view = view

    def county_features(self) -> pd.DataFrame:
        return county_features(self._view)

    def breed_traits(self) -> pd.DataFrame:
        return breed_traits(self._view)

    def breed_state_shares(self) -> pd.DataFrame:
        return breed_state_shares(self._view)


class MaterializedAggregates:
    """Aggregate tables recomputed on :meth:`refresh`, or on read once a bound TTL expires.

    A refresh builds all three tables from one snapshot and swaps them in
    together, so readers never see tables from different snapshots. A lock
    serialises refreshes and reads across request threads.
    """

    def __init__(self) -> None:
        self._tables: dict[str, pd.DataFrame] | None = None
        self._refreshed_at: float | None = None
        self._refreshes: int = 0
        self._reads: int = 0
        self._source: DatasetView | None = None
        self._ttl_seconds: float | None = None
        self._lock = threading.RLock()

    def bind(self, view: DatasetView, ttl_seconds: float) -> None:
        """Refresh from *view* on the next read once the tables are older than *ttl_seconds*."""
        with self._lock:
            self._source = view
            self._ttl_seconds = ttl_seconds

    def refresh(self, view: DatasetView) -> None:
        with self._lock:
            start = time.time()
            tables = {name: build(view) for name, build in _TABLES.items()}
            finished = time.time()
            self._tables = tables
            self._refreshed_at = finished
            self._refreshes += 1
        elapsed_ms = round((finished - start) * 1000, 1)
        logger.info(
            "Refreshed read models in %sms: %s",
            elapsed_ms,
            {name: len(df) for name, df in tables.items()},
        )

    def _get(self, name: str) -> pd.DataFrame:
        with self._lock:
            if self._source is not None and self.is_stale(self._ttl_seconds):
                self.refresh(self._source)
            if self._tables is None:
                raise RuntimeError("Read models have not been refreshed yet")
            self._reads += 1
            table = self._tables[name]
        return table.copy()

    def county_features(self) -> pd.DataFrame:
        return self._get("county_features")

    def breed_traits(self) -> pd.DataFrame:
        return self._get("breed_traits")

    def breed_state_shares(self) -> pd.DataFrame:
        return self._get("breed_state_shares")

    @property
    def is_ready(self) -> bool:
        return self._tables is not None

    def is_stale(self, ttl_seconds: float) -> bool:
        if self._refreshed_at is None:
            return True
        return time.time() - self._refreshed_at >= ttl_seconds

    def stats(self) -> dict[str, Any]:
        with self._lock:
            age = round(time.time() - self._refreshed_at, 1) if self._refreshed_at else None
            return {
                "ready": self.is_ready,
                "refreshes": self._refreshes,
                "reads": self._reads,
                "refreshed_at": self._refreshed_at,
                "age_seconds": age,
                "rows": {name: len(df) for name, df in (self._tables or {}).items()},
            }
