from __future__ import annotations

from typing import Any

import pandas as pd
from pydantic import BaseModel, Field

Id = int | str


class TopBreedRow(BaseModel):
    state: str
    breed_primary: str
    adoption_count: int


class BreedRecommendation(BaseModel):
    breed: str
    county: str
    score: float


class ShelterEconomicsRow(BaseModel):
    org_id: Id
    city: str | None
    state: str
    avg_income: float | None
    avg_unemployment: float | None
    avg_poverty_rate: float | None
    avg_commute_time: float | None
    avg_income_per_capita: float | None


class SupplyIncomeRow(BaseModel):
    state: str
    median_income: float
    num_dogs: int
    rank: int


class OverRepresentedRow(BaseModel):
    breed_primary: str
    state: str
    breed_count_in_state: int
    total_dogs_in_state: int
    breed_share: float = Field(..., gt=0.0, le=1.0)


class PreferredDog(BaseModel):
    dog_id: Id
    name: str | None
    age: str | None
    sex: str | None
    size: str | None
    color_primary: str | None
    coat: str | None
    fixed: bool | None
    house_trained: bool | None
    shots_current: bool | None
    breed_primary: str | None
    description: str | None
    match_score: int


class IncomeRecommendation(BaseModel):
    breed_primary: str
    total_adoptions: int
    avg_income_for_breed: float


class CityBreedRow(BaseModel):
    city: str
    breed_primary: str
    adoption_count: int
    rank: int


class SampleDog(BaseModel):
    dog_id: Id
    name: str | None
    age: str | None
    sex: str | None
    size: str | None
    city: str | None
    state: str
    fixed: bool | None
    house_trained: bool | None
    env_children: bool | None
    special_needs: bool | None
    description: str | None


class CityDog(BaseModel):
    org_id: Id
    city: str
    state: str | None
    zip: Id | None
    dog_id: Id
    dog_name: str | None
    dog_age: str | None
    dog_sex: str | None
    dog_size: str | None
    breed_primary: str | None
    breed_secondary: str | None
    breed_mixed: bool | None
    color_primary: str | None
    color_secondary: str | None
    coat: str | None
    fixed: bool | None
    house_trained: bool | None
    special_needs: bool | None
    shots_current: bool | None
    env_children: bool | None


class MetadataResponse(BaseModel):
    states: list[str]
    cities: list[str]
    counties: list[str]
    breeds: list[str]


def to_records(df: pd.DataFrame) -> list[dict[str, Any]]:
    """DataFrame rows as plain dicts with Python scalars and ``None`` for missing."""
    if df.empty:
        return []
    plain = df.astype(object)
    return plain.where(plain.notna(), None).to_dict(orient="records")
