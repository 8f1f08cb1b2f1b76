from __future__ import annotations

import pandas as pd
import pytest

from adoptrank.analytics.shares import SHARE_COLUMNS, breed_state_shares, over_represented
from adoptrank.read_models.cache import DirectAggregates
from adoptrank.tests.sample_data import build_view


class _Shares:
    def __init__(self, shares: pd.DataFrame) -> None:
        self._shares = shares

    def breed_state_shares(self) -> pd.DataFrame:
        return self._shares


def test_shares_sum_to_breed_total():
    shares = breed_state_shares(build_view())
    totals = shares.groupby("breed_primary")["breed_count_in_state"].sum().to_dict()
    assert totals == {"Beagle": 5, "Labrador": 4, "Poodle": 1}


def test_share_values():
    shares = breed_state_shares(build_view()).set_index(["breed_primary", "state"])
    assert shares.loc[("Beagle", "OR"), "breed_share"] == pytest.approx(2 / 3)
    assert shares.loc[("Beagle", "WA"), "total_dogs_in_state"] == 5
    assert shares.loc[("Labrador", "TX"), "total_dogs_in_state"] == 3
    assert ("Poodle", "OR") not in shares.index


def test_every_share_is_positive_and_at_most_one():
    shares = breed_state_shares(build_view())
    assert ((shares["breed_share"] > 0) & (shares["breed_share"] <= 1)).all()


def test_over_represented_orders_states_by_share():
    result = over_represented(DirectAggregates(build_view()))
    beagle = result.loc[result["breed_primary"] == "Beagle"]
    assert beagle["state"].tolist() == ["OR", "WA", "TX"]
    labrador = result.loc[result["breed_primary"] == "Labrador"]
    assert labrador["state"].tolist() == ["WA", "OR", "TX"]
    assert list(result.columns) == SHARE_COLUMNS


def test_beagle_scenario():
    shares = pd.DataFrame({
        "breed_primary": ["Beagle", "Beagle", "Beagle"],
        "state": ["A", "B", "C"],
        "breed_count_in_state": [80, 5, 3],
        "total_dogs_in_state": [100, 50, 10],
    })
    shares["breed_share"] = shares["breed_count_in_state"] / shares["total_dogs_in_state"]
    result = over_represented(_Shares(shares))
    assert result["state"].tolist() == ["A", "C", "B"]
    assert result["breed_share"].tolist() == pytest.approx([0.8, 0.3, 0.1])


def test_at_most_five_states_per_breed():
    states = [f"S{i}" for i in range(8)]
    shares = pd.DataFrame({
        "breed_primary": ["Pug"] * 8,
        "state": states,
        "breed_count_in_state": list(range(1, 9)),
        "total_dogs_in_state": [10] * 8,
    })
    shares["breed_share"] = shares["breed_count_in_state"] / 10
    result = over_represented(_Shares(shares))
    assert result["state"].tolist() == ["S7", "S6", "S5", "S4", "S3"]
