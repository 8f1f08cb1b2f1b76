from __future__ import annotations

import pandas as pd

from ..dataset.view import DatasetView

ECONOMIC_AVERAGES: dict[str, str] = {
    "income": "avg_income",
    "unemployment": "avg_unemployment",
    "poverty": "avg_poverty_rate",
    "mean_commute": "avg_commute_time",
    "income_per_cap": "avg_income_per_capita",
}

SHELTER_ECONOMICS_COLUMNS = ["org_id", "city", "state", *ECONOMIC_AVERAGES.values()]


def shelters_with_overdue_shots(view: DatasetView) -> set:
    """Shelters holding at least one dog whose shots are known not to be current."""
    overdue = view.attributes.loc[view.attributes["shots_current"].eq(False).fillna(False)]
    dogs = view.dogs.loc[view.dogs["dog_id"].isin(overdue["dog_id"])]
    return set(dogs["org_id"])


def gold_shelters(view: DatasetView) -> set:
    """Shelters where no dog is behind on shots.

    Computed as all shelters minus those with an overdue dog, so a shelter
    with no dogs at all qualifies.
    """
    return set(view.shelters["org_id"]) - shelters_with_overdue_shots(view)


def state_economics(view: DatasetView) -> pd.DataFrame:
    """Mean tract economics per shelter-side state key."""
    tracts = view.tract_economics().merge(
        view.demographics[["tract_id"]], on="tract_id", how="inner",
    )
    if tracts.empty:
        return pd.DataFrame(columns=["state", *ECONOMIC_AVERAGES.values()])
    return (
        tracts.groupby("state_key")[list(ECONOMIC_AVERAGES)]
        .mean()
        .rename(columns=ECONOMIC_AVERAGES)
        .rename_axis("state")
        .reset_index()
    )


def shelter_economics(view: DatasetView) -> pd.DataFrame:
    """Gold shelters with their state's average economics, richest first."""
    gold = gold_shelters(view)
    shelters = view.shelters.loc[view.shelters["org_id"].isin(gold), ["org_id", "city", "state"]]
    joined = shelters.merge(state_economics(view), on="state", how="inner")
    if joined.empty:
        return pd.DataFrame(columns=SHELTER_ECONOMICS_COLUMNS)
    joined = joined.sort_values(
        ["avg_income", "org_id"], ascending=[False, True], kind="mergesort", na_position="last",
    )
    return joined[SHELTER_ECONOMICS_COLUMNS].reset_index(drop=True)
