from __future__ import annotations

import pandas as pd

from ..dataset.view import DatasetView
from ..errors import require_param

MAX_SAMPLE_DOGS = 50

SAMPLE_COLUMNS = [
    "dog_id",
    "name",
    "age",
    "sex",
    "size",
    "city",
    "state",
    "fixed",
    "house_trained",
    "env_children",
    "special_needs",
    "description",
]

CITY_DOG_COLUMNS = {
    "org_id": "org_id",
    "city": "city",
    "state": "state",
    "zip": "zip",
    "dog_id": "dog_id",
    "name": "dog_name",
    "age": "dog_age",
    "sex": "dog_sex",
    "size": "dog_size",
    "breed_primary": "breed_primary",
    "breed_secondary": "breed_secondary",
    "breed_mixed": "breed_mixed",
    "color_primary": "color_primary",
    "color_secondary": "color_secondary",
    "coat": "coat",
    "fixed": "fixed",
    "house_trained": "house_trained",
    "special_needs": "special_needs",
    "shots_current": "shots_current",
    "env_children": "env_children",
}


def _true_first(series: pd.Series) -> pd.Series:
    """Sort key: True -> 0, False -> 1, missing -> 2."""
    key = pd.Series(2, index=series.index, dtype=int)
    key[series.eq(True).fillna(False).astype(bool)] = 0
    key[series.eq(False).fillna(False).astype(bool)] = 1
    return key


def sample_dogs(view: DatasetView, target_state: str | None, chosen_breed: str | None) -> pd.DataFrame:
    """Up to 50 dogs of *chosen_breed* in *target_state*, child-friendly and fixed first."""
    state = require_param("target_state", target_state).lower()
    breed = require_param("chosen_breed", chosen_breed).lower()

    dogs = view.dog_profiles()
    mask = (
        dogs["state"].astype(str).str.lower().eq(state)
        & dogs["breed_primary"].astype(str).str.lower().eq(breed)
        & dogs["breed_primary"].notna()
    )
    dogs = dogs.loc[mask].copy()
    if dogs.empty:
        return pd.DataFrame(columns=SAMPLE_COLUMNS)

    dogs["_children_key"] = _true_first(dogs["env_children"])
    dogs["_fixed_key"] = _true_first(dogs["fixed"])
    dogs = dogs.sort_values(
        ["_children_key", "_fixed_key", "name", "dog_id"], kind="mergesort", na_position="last",
    )
    return dogs[SAMPLE_COLUMNS].head(MAX_SAMPLE_DOGS).reset_index(drop=True)


def dogs_by_city(view: DatasetView, city: str | None) -> pd.DataFrame:
    """Every dog at the shelters of *city*, with breed and attribute details."""
    city = require_param("city", city)
    dogs = view.dog_profiles()
    dogs = dogs.loc[dogs["city"] == city]
    if dogs.empty:
        return pd.DataFrame(columns=list(CITY_DOG_COLUMNS.values()))
    dogs = dogs.sort_values(["org_id", "dog_id"], kind="mergesort")
    return dogs[list(CITY_DOG_COLUMNS)].rename(columns=CITY_DOG_COLUMNS).reset_index(drop=True)
