from __future__ import annotations

import math

import pandas as pd
import pytest

from adoptrank.scoring.normalizer import min_max_normalize, normalize_columns


def test_extremes_map_to_zero_and_one():
    result = min_max_normalize(pd.Series([40000.0, 80000.0, 60000.0, 50000.0]))
    assert result.iloc[0] == 0.0
    assert result.iloc[1] == pytest.approx(1.0)
    assert result.iloc[2] == pytest.approx(0.5)
    assert result.iloc[3] == pytest.approx(0.25)


def test_all_values_within_unit_interval():
    values = pd.Series([3.7, -12.0, 8.25, 0.0, 1e6, 42.0])
    result = min_max_normalize(values)
    assert ((result >= 0.0) & (result <= 1.0)).all()


def test_constant_population_maps_to_zero():
    result = min_max_normalize(pd.Series([55.0, 55.0, 55.0]))
    assert result.tolist() == [0.0, 0.0, 0.0]


def test_single_element_maps_to_zero():
    result = min_max_normalize(pd.Series([12345.0]))
    assert result.tolist() == [0.0]


def test_missing_values_stay_missing_and_are_ignored():
    result = min_max_normalize(pd.Series([10.0, None, 20.0]))
    assert result.iloc[0] == 0.0
    assert math.isnan(result.iloc[1])
    assert result.iloc[2] == pytest.approx(1.0)


def test_empty_series():
    assert min_max_normalize(pd.Series([], dtype=float)).empty


def test_index_is_preserved():
    values = pd.Series([1.0, 3.0], index=["King County", "Pierce County"])
    result = min_max_normalize(values)
    assert list(result.index) == ["King County", "Pierce County"]


def test_normalize_columns_adds_targets_without_touching_input():
    frame = pd.DataFrame({"county": ["A", "B"], "avg_income": [1.0, 2.0]})
    out = normalize_columns(frame, {"avg_income": "norm_income"})
    assert "norm_income" not in frame.columns
    assert out["norm_income"].tolist() == pytest.approx([0.0, 1.0])
