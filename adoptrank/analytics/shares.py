from __future__ import annotations

import pandas as pd

from ..dataset.view import DatasetView
from ..read_models.base import AggregateSource
from ..scoring.ranking import top_k_per_partition

TOP_STATES_PER_BREED = 5

SHARE_COLUMNS = [
    "breed_primary",
    "state",
    "breed_count_in_state",
    "total_dogs_in_state",
    "breed_share",
]


def breed_state_shares(view: DatasetView) -> pd.DataFrame:
    """
    Share of each state's dogs that belong to each breed.

    Only (breed, state) pairs with at least one dog are present, so every
    ``breed_share`` is in (0, 1]. ``total_dogs_in_state`` counts all dogs
    at the state's shelters, with or without a breed record.
    """
    totals = (
        view.dogs_with_shelters()
        .groupby("state")
        .size()
        .rename("total_dogs_in_state")
    )
    breed_dogs = view.dog_breeds()
    if breed_dogs.empty:
        return pd.DataFrame(columns=SHARE_COLUMNS)

    counts = (
        breed_dogs.groupby(["breed_primary", "state"])
        .size()
        .reset_index(name="breed_count_in_state")
    )
    shares = counts.join(totals, on="state", how="inner")
    shares["breed_share"] = shares["breed_count_in_state"] / shares["total_dogs_in_state"]
    return (
        shares[SHARE_COLUMNS]
        .sort_values(["breed_primary", "state"])
        .reset_index(drop=True)
    )


def over_represented(source: AggregateSource) -> pd.DataFrame:
    """The states where each breed makes up the largest share of dogs."""
    top = top_k_per_partition(
        source.breed_state_shares(),
        "breed_share",
        TOP_STATES_PER_BREED,
        partition="breed_primary",
        tie_break="state",
    )
    return top[SHARE_COLUMNS]
