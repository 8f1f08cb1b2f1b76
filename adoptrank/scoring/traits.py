from __future__ import annotations

import pandas as pd

from ..dataset.view import DatasetView

TRAIT_COLUMNS = ["breed", "pct_fixed", "pct_long_coat", "pct_special_needs", "popularity_count"]


def _indicator(series: pd.Series) -> pd.Series:
    """0/1 float indicator; missing values count as 0."""
    return series.fillna(False).astype(bool).astype(float)


def breed_traits(view: DatasetView) -> pd.DataFrame:
    """
    Per-breed trait fractions.

    Each ``pct_*`` column is the mean of a 0/1 indicator over the breed's
    dogs that carry an attributes record. ``popularity_count`` is the
    unfiltered number of dogs with that primary breed. Breeds with no
    attributed dogs are absent from the result.
    """
    dogs = view.dog_breeds()[["dog_id", "breed_primary"]]
    if dogs.empty:
        return pd.DataFrame(columns=TRAIT_COLUMNS)

    popularity = dogs.groupby("breed_primary").size().rename("popularity_count")

    attributed = dogs.merge(view.attributes, on="dog_id", how="inner")
    if attributed.empty:
        return pd.DataFrame(columns=TRAIT_COLUMNS)

    indicators = pd.DataFrame({
        "breed": attributed["breed_primary"],
        "pct_fixed": _indicator(attributed["fixed"]),
        "pct_long_coat": _indicator(attributed["coat"].eq("Long")),
        "pct_special_needs": _indicator(attributed["special_needs"]),
    })
    traits = indicators.groupby("breed").mean()
    traits = traits.join(popularity, how="left").reset_index()
    traits["popularity_count"] = traits["popularity_count"].astype(int)
    return traits[TRAIT_COLUMNS].sort_values("breed").reset_index(drop=True)
