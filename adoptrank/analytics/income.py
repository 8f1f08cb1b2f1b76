from __future__ import annotations

import math

import pandas as pd

from ..dataset.view import DatasetView
from ..errors import InvalidParameter, MissingRequiredParameter
from ..scoring.ranking import first_n, rank_rows

MIN_STATE_AVG_INCOME = 30000.0
MAX_STATE_AVG_INCOME = 85000.0
INCOME_WINDOW = 20000.0
MAX_INCOME_RECOMMENDATIONS = 10


def state_income(view: DatasetView) -> pd.DataFrame:
    """Mean tract income per shelter-side state key."""
    tracts = view.tract_economics()
    if tracts.empty:
        return pd.DataFrame(columns=["state", "avg_income"])
    return (
        tracts.groupby("state_key")["income"]
        .mean()
        .rename("avg_income")
        .rename_axis("state")
        .reset_index()
    )


def supply_income(view: DatasetView) -> pd.DataFrame:
    """States ranked by dogs available per dollar of average income."""
    dogs = view.dogs_with_shelters().groupby("state").size().rename("num_dogs").reset_index()
    income = state_income(view).rename(columns={"avg_income": "median_income"})
    joined = dogs.merge(income, on="state", how="inner")
    joined = joined.loc[joined["median_income"] > 0].copy()
    joined["supply_ratio"] = joined["num_dogs"] / joined["median_income"]

    ranked = rank_rows(joined, "supply_ratio", tie_break="state")
    return ranked[["state", "median_income", "num_dogs", "rank"]]


def parse_income(raw: object) -> float:
    """Parse a caller-supplied income, rejecting anything non-numeric or non-finite."""
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise MissingRequiredParameter("income")
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise InvalidParameter("income", raw) from None
    if not math.isfinite(value):
        raise InvalidParameter("income", raw)
    return value


def clamp_income(income: float) -> float:
    return min(max(income, MIN_STATE_AVG_INCOME), MAX_STATE_AVG_INCOME)


def income_recommend(view: DatasetView, income: object) -> pd.DataFrame:
    """
    Most adopted breeds in states whose average income is near *income*.

    *income* is clamped to [30000, 85000]; states qualify when their average
    tract income is within 20000 of the clamped value (inclusive).
    """
    target = clamp_income(parse_income(income))
    low, high = target - INCOME_WINDOW, target + INCOME_WINDOW

    states = state_income(view)
    states = states.loc[states["avg_income"].between(low, high)]

    dogs = view.dog_breeds()
    per_state = (
        dogs.groupby(["state", "breed_primary"]).size().reset_index(name="num_adoptions")
        if not dogs.empty
        else pd.DataFrame(columns=["state", "breed_primary", "num_adoptions"])
    )
    joined = per_state.merge(states, on="state", how="inner")
    if joined.empty:
        return pd.DataFrame(columns=["breed_primary", "total_adoptions", "avg_income_for_breed"])

    by_breed = (
        joined.groupby("breed_primary")
        .agg(
            total_adoptions=("num_adoptions", "sum"),
            avg_income_for_breed=("avg_income", "mean"),
        )
        .reset_index()
    )
    top = first_n(by_breed, "total_adoptions", MAX_INCOME_RECOMMENDATIONS, tie_break="breed_primary")
    return top[["breed_primary", "total_adoptions", "avg_income_for_breed"]]
