from __future__ import annotations

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..dataset.view import DatasetView
from .ranking import first_n

# Only dogs whose description mentions this word are ever candidates.
CANDIDATE_KEYWORD = "friendly"
MAX_MATCHES = 10

# filter field -> dog profile column
FILTER_COLUMNS: dict[str, str] = {
    "color": "color_primary",
    "size": "size",
    "breed": "breed_primary",
    "age": "age",
    "sex": "sex",
    "fixed": "fixed",
    "house_trained": "house_trained",
    "coat": "coat",
    "shots_current": "shots_current",
}

MATCH_COLUMNS = [
    "dog_id",
    "name",
    "age",
    "sex",
    "size",
    "color_primary",
    "coat",
    "fixed",
    "house_trained",
    "shots_current",
    "breed_primary",
    "description",
    "match_score",
]


class PreferenceFilters(BaseModel):
    """Optional adopter preferences. ``None`` means "no preference" and always matches."""

    model_config = ConfigDict(frozen=True)

    color: str | None = Field(default=None, description="Primary coat colour")
    size: str | None = None
    breed: str | None = Field(default=None, description="Primary breed")
    age: str | None = Field(default=None, description="Age bucket, e.g. Baby, Young, Adult, Senior")
    sex: str | None = None
    fixed: bool | None = None
    house_trained: bool | None = None
    coat: str | None = None
    shots_current: bool | None = None

    @field_validator("color", "size", "breed", "age", "sex", "coat", mode="before")
    @classmethod
    def _blank_is_unset(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def active(self) -> dict[str, object]:
        return {k: v for k, v in self.model_dump().items() if v is not None}


def candidate_dogs(view: DatasetView) -> pd.DataFrame:
    """Dogs with attributes, breed and a description mentioning the keyword."""
    dogs = (
        view.dogs.merge(view.attributes, on="dog_id", how="inner")
        .merge(view.breeds, on="dog_id", how="inner")
        .merge(view.descriptions, on="dog_id", how="inner")
    )
    mask = dogs["description"].astype(str).str.contains(CANDIDATE_KEYWORD, case=False, na=False)
    return dogs.loc[mask].reset_index(drop=True)


def match_scores(dogs: pd.DataFrame, filters: PreferenceFilters) -> pd.Series:
    """Number of filters each dog satisfies; an unset filter counts as satisfied."""
    score = pd.Series(0, index=dogs.index, dtype=int)
    for field_name, column in FILTER_COLUMNS.items():
        wanted = getattr(filters, field_name)
        if wanted is None:
            score += 1
            continue
        score += dogs[column].eq(wanted).fillna(False).astype(bool).astype(int)
    return score


def user_preferred(view: DatasetView, filters: PreferenceFilters | None = None) -> pd.DataFrame:
    """Top matching dogs, best match first, lowest dog_id first among ties."""
    filters = filters or PreferenceFilters()
    dogs = candidate_dogs(view)
    if dogs.empty:
        return pd.DataFrame(columns=MATCH_COLUMNS)

    dogs["match_score"] = match_scores(dogs, filters)
    top = first_n(dogs, "match_score", MAX_MATCHES, tie_break="dog_id")
    return top[MATCH_COLUMNS]
