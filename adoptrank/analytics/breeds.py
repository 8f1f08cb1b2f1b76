from __future__ import annotations

import pandas as pd

from ..dataset.view import DatasetView
from ..scoring.ranking import rank_rows, top_per_partition


def _count_by(dogs: pd.DataFrame, by: str) -> pd.DataFrame:
    if dogs.empty:
        return pd.DataFrame(columns=[by, "breed_primary", "adoption_count"])
    return (
        dogs.groupby([by, "breed_primary"])
        .size()
        .reset_index(name="adoption_count")
    )


def breed_counts(view: DatasetView, by: str) -> pd.DataFrame:
    """Dogs per (*by*, breed_primary) where *by* is a shelter column."""
    return _count_by(view.dog_breeds(), by)


def top_breed_per_state(view: DatasetView, state: str | None = None) -> pd.DataFrame:
    """Most common breed in each state; tied breeds are all returned."""
    dogs = view.dog_breeds()
    if state:
        dogs = dogs.loc[dogs["state"] == state]

    top = top_per_partition(
        _count_by(dogs, "state"),
        "adoption_count",
        partition="state",
        tie_break="breed_primary",
    )
    return top[["state", "breed_primary", "adoption_count"]]


def city_breeds(view: DatasetView) -> pd.DataFrame:
    """Every (city, breed) pair ranked by adoption count within its city."""
    ranked = rank_rows(
        breed_counts(view, "city"),
        "adoption_count",
        partition="city",
        tie_break="breed_primary",
    )
    return ranked[["city", "breed_primary", "adoption_count", "rank"]]
