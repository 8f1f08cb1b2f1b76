from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Dict, List, Mapping

import pandas as pd

from ..errors import UpstreamUnavailable

logger = logging.getLogger(__name__)


TABLE_COLUMNS: Dict[str, List[str]] = {
    "tracts": ["tract_id", "county", "state"],
    "economics": [
        "tract_id",
        "income",
        "income_per_cap",
        "poverty",
        "child_poverty",
        "unemployment",
        "employed",
        "mean_commute",
    ],
    "demographics": ["tract_id", "total_pop", "men", "women"],
    "shelters": ["org_id", "city", "state", "zip"],
    "dogs": ["dog_id", "org_id", "name", "age", "sex", "size"],
    "breeds": ["dog_id", "breed_primary", "breed_secondary", "breed_mixed"],
    "attributes": [
        "dog_id",
        "color_primary",
        "color_secondary",
        "coat",
        "fixed",
        "house_trained",
        "shots_current",
        "special_needs",
        "env_children",
    ],
    "descriptions": ["dog_id", "description"],
    "states": ["state_name", "state_abbrev"],
}

OPTIONAL_TABLES = frozenset({"descriptions", "states"})

BOOLEAN_COLUMNS: Dict[str, List[str]] = {
    "breeds": ["breed_mixed"],
    "attributes": ["fixed", "house_trained", "shots_current", "special_needs", "env_children"],
}

NUMERIC_COLUMNS: Dict[str, List[str]] = {
    "economics": TABLE_COLUMNS["economics"][1:],
    "demographics": TABLE_COLUMNS["demographics"][1:],
}

# Extension tables hold at most one row per dog.
_ONE_PER_DOG = ("breeds", "attributes", "descriptions")

_TRUE_TOKENS = {"true", "t", "yes", "y", "1"}
_FALSE_TOKENS = {"false", "f", "no", "n", "0"}


def _to_bool(value: object) -> object:
    if value is None or value is pd.NA:
        return pd.NA
    if isinstance(value, bool):
        return value
    if isinstance(value, float) and pd.isna(value):
        return pd.NA
    if isinstance(value, (int, float)):
        return bool(value)
    token = str(value).strip().lower()
    if token in _TRUE_TOKENS:
        return True
    if token in _FALSE_TOKENS:
        return False
    return pd.NA


def _canonicalize(table: str, frame: pd.DataFrame) -> pd.DataFrame:
    missing = [c for c in TABLE_COLUMNS[table] if c not in frame.columns]
    if missing:
        raise UpstreamUnavailable(f"Table '{table}' is missing columns: {', '.join(missing)}")

    frame = frame.copy()
    for col in BOOLEAN_COLUMNS.get(table, []):
        frame[col] = frame[col].map(_to_bool).astype("boolean")
    for col in NUMERIC_COLUMNS.get(table, []):
        frame[col] = pd.to_numeric(frame[col], errors="coerce")

    if table in _ONE_PER_DOG:
        dupes = frame["dog_id"].duplicated()
        if dupes.any():
            logger.warning("Dropping %d duplicate %s rows", int(dupes.sum()), table)
            frame = frame.loc[~dupes]

    return frame.reset_index(drop=True)


@dataclass(frozen=True)
class DatasetView:
    """Immutable snapshot of every table the engine reads.

    Build it with :meth:`from_frames`, which validates and types the raw
    frames. All joined helpers return fresh frames, so callers are free to
    add columns to what they get back.
    """

    tracts: pd.DataFrame
    economics: pd.DataFrame
    demographics: pd.DataFrame
    shelters: pd.DataFrame
    dogs: pd.DataFrame
    breeds: pd.DataFrame
    attributes: pd.DataFrame
    descriptions: pd.DataFrame
    states: pd.DataFrame

    @classmethod
    def from_frames(cls, frames: Mapping[str, pd.DataFrame]) -> "DatasetView":
        tables: Dict[str, pd.DataFrame] = {}
        for f in fields(cls):
            frame = frames.get(f.name)
            if frame is None:
                if f.name not in OPTIONAL_TABLES:
                    raise UpstreamUnavailable(f"Required table '{f.name}' is missing")
                frame = pd.DataFrame(columns=TABLE_COLUMNS[f.name])
            tables[f.name] = _canonicalize(f.name, frame)
        return cls(**tables)

    # ── Joined read models ──────────────────────────────────────────────

    def dogs_with_shelters(self) -> pd.DataFrame:
        """Every dog with its (mandatory) shelter columns."""
        return self.dogs.merge(self.shelters, on="org_id", how="inner")

    def dog_profiles(self) -> pd.DataFrame:
        """Dogs and shelters, outer-joined with breed, attributes and description."""
        return (
            self.dogs_with_shelters()
            .merge(self.breeds, on="dog_id", how="left")
            .merge(self.attributes, on="dog_id", how="left")
            .merge(self.descriptions, on="dog_id", how="left")
        )

    def dog_breeds(self) -> pd.DataFrame:
        """Dogs with a known primary breed, joined to their shelter."""
        breeds = self.breeds.loc[self.breeds["breed_primary"].notna()]
        return self.dogs_with_shelters().merge(breeds, on="dog_id", how="inner")

    def tract_economics(self) -> pd.DataFrame:
        """Tracts with their economic record and a shelter-comparable ``state_key``."""
        df = self.tracts.merge(self.economics, on="tract_id", how="inner")
        if self.states.empty:
            df["state_key"] = df["state"]
            return df
        mapping = dict(zip(self.states["state_name"], self.states["state_abbrev"]))
        df["state_key"] = df["state"].map(mapping)
        return df.loc[df["state_key"].notna()].reset_index(drop=True)

    def row_counts(self) -> Dict[str, int]:
        return {f.name: len(getattr(self, f.name)) for f in fields(self)}
