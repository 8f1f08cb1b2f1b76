"""
Breed-to-county suitability scoring.

The score is a fixed linear blend of breed traits and normalised county
economics::

    score = 0.40 * (1 - pct_special_needs)
          + 0.25 * pct_fixed
          + 0.10 * (1 - pct_long_coat)
          + 0.15 * norm_income
          + 0.10 * (1 - norm_poverty)

The weights are engine constants so scores stay comparable between runs.
``recommend_breeds`` adds a small capped popularity bonus so that, among
near-equal scores, more common breeds come first.
"""
from __future__ import annotations

import numpy as np
import pandas as pd

from ..dataset.view import DatasetView
from ..errors import require_param
from ..read_models.base import AggregateSource
from .normalizer import normalize_columns
from .ranking import first_n

WEIGHTS: dict[str, float] = {
    "special_needs": 0.40,
    "fixed": 0.25,
    "long_coat": 0.10,
    "income": 0.15,
    "poverty": 0.10,
}

POPULARITY_BONUS_PER_DOG = 0.0001
POPULARITY_BONUS_CAP = 500

MAX_BREED_RECOMMENDATIONS = 30

COUNTY_FEATURE_COLUMNS = [
    "county",
    "avg_income",
    "avg_poverty",
    "avg_commute",
    "norm_income",
    "norm_poverty",
    "norm_commute",
]


def county_features(view: DatasetView) -> pd.DataFrame:
    """Mean tract economics per county, min-max normalised over all counties.

    Each metric is normalised over the counties that report it, so a
    county missing one metric keeps its place in the other two.
    """
    tracts = view.tract_economics()
    if tracts.empty:
        return pd.DataFrame(columns=COUNTY_FEATURE_COLUMNS)

    stats = (
        tracts.groupby("county")
        .agg(
            avg_income=("income", "mean"),
            avg_poverty=("poverty", "mean"),
            avg_commute=("mean_commute", "mean"),
        )
        .reset_index()
    )
    stats = normalize_columns(
        stats,
        {
            "avg_income": "norm_income",
            "avg_poverty": "norm_poverty",
            "avg_commute": "norm_commute",
        },
    )
    return stats[COUNTY_FEATURE_COLUMNS].sort_values("county").reset_index(drop=True)


def suitability_score(
    pct_special_needs,
    pct_fixed,
    pct_long_coat,
    norm_income,
    norm_poverty,
):
    """Raw blended score in [0, 1]. Works on scalars and on aligned Series."""
    return (
        WEIGHTS["special_needs"] * (1 - pct_special_needs)
        + WEIGHTS["fixed"] * pct_fixed
        + WEIGHTS["long_coat"] * (1 - pct_long_coat)
        + WEIGHTS["income"] * norm_income
        + WEIGHTS["poverty"] * (1 - norm_poverty)
    )


def popularity_bonus(popularity_count):
    return POPULARITY_BONUS_PER_DOG * np.minimum(popularity_count, POPULARITY_BONUS_CAP)


def score_breeds(traits: pd.DataFrame, counties: pd.DataFrame) -> pd.DataFrame:
    """Cross every breed with every county row and score the pairs.

    Returns ``breed``, ``county``, ``raw_score`` and ``score`` (raw plus the
    popularity bonus). County rows without a normalised income or poverty value are not scored.
    """
    if traits.empty or counties.empty:
        return pd.DataFrame(columns=["breed", "county", "raw_score", "score"])

    counties = counties.dropna(subset=["norm_income", "norm_poverty"])
    pairs = traits.merge(counties, how="cross")
    pairs["raw_score"] = suitability_score(
        pairs["pct_special_needs"],
        pairs["pct_fixed"],
        pairs["pct_long_coat"],
        pairs["norm_income"],
        pairs["norm_poverty"],
    )
    pairs["score"] = pairs["raw_score"] + popularity_bonus(pairs["popularity_count"].astype(float))
    return pairs[["breed", "county", "raw_score", "score"]]


def recommend_breeds(source: AggregateSource, county: str | None) -> pd.DataFrame:
    """Best-suited breeds for *county*, highest score first.

    Counties are normalised over the whole county population before the
    requested one is picked out. An unknown county yields no rows.
    """
    county = require_param("county", county)

    counties = source.county_features()
    counties = counties.loc[counties["county"] == county]
    scored = score_breeds(source.breed_traits(), counties)
    top = first_n(scored, "score", MAX_BREED_RECOMMENDATIONS, tie_break="breed")
    return top[["breed", "county", "score"]]
