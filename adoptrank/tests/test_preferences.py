from __future__ import annotations

import pandas as pd

from adoptrank.scoring.preferences import (
    MATCH_COLUMNS,
    PreferenceFilters,
    candidate_dogs,
    match_scores,
    user_preferred,
)
from adoptrank.tests.sample_data import build_frames, build_view


def test_candidates_require_friendly_description():
    dogs = candidate_dogs(build_view())
    assert sorted(dogs["dog_id"].tolist()) == [1, 2, 4, 6, 8, 9]


def test_no_filters_every_candidate_ties():
    result = user_preferred(build_view())
    assert set(result["match_score"]) == {9}
    assert result["dog_id"].tolist() == [1, 2, 4, 6, 8, 9]
    assert list(result.columns) == MATCH_COLUMNS


def test_one_filter_adds_exactly_one_point():
    dogs = candidate_dogs(build_view())
    scores = dict(zip(dogs["dog_id"], match_scores(dogs, PreferenceFilters(color="Tricolor"))))
    assert scores[2] == 9
    assert scores[1] == 8
    assert scores[2] - scores[1] == 1


def test_matching_dogs_rank_first_then_dog_id():
    result = user_preferred(build_view(), PreferenceFilters(color="Tricolor"))
    assert result["dog_id"].tolist() == [2, 4, 6, 1, 8, 9]
    assert result["match_score"].tolist() == [9, 9, 9, 8, 8, 8]


def test_false_boolean_filter_is_a_real_preference():
    result = user_preferred(build_view(), PreferenceFilters(fixed=False))
    assert result["dog_id"].iloc[0] == 6
    assert result["match_score"].iloc[0] == 9


def test_multiple_filters_accumulate():
    filters = PreferenceFilters(breed="Labrador", size="Large", sex="Male")
    result = user_preferred(build_view(), filters)
    assert result["dog_id"].tolist()[:2] == [1, 9]
    assert result["match_score"].tolist()[:2] == [9, 9]


def test_at_most_ten_results():
    ids = list(range(100, 115))
    n = len(ids)
    many = build_view(
        dogs=pd.DataFrame({
            "dog_id": ids, "org_id": ["s1"] * n, "name": ["Pup"] * n,
            "age": ["Young"] * n, "sex": ["Male"] * n, "size": ["Small"] * n,
        }),
        breeds=pd.DataFrame({
            "dog_id": ids, "breed_primary": ["Beagle"] * n,
            "breed_secondary": [None] * n, "breed_mixed": [False] * n,
        }),
        attributes=pd.DataFrame({
            "dog_id": ids, "color_primary": ["Black"] * n, "color_secondary": [None] * n,
            "coat": ["Short"] * n, "fixed": [True] * n, "house_trained": [True] * n,
            "shots_current": [True] * n, "special_needs": [False] * n, "env_children": [True] * n,
        }),
        descriptions=pd.DataFrame({"dog_id": ids, "description": ["friendly"] * n}),
    )
    result = user_preferred(many)
    assert result["dog_id"].tolist() == list(range(100, 110))


def test_active_filters():
    filters = PreferenceFilters(coat="Long", shots_current=True)
    assert filters.active() == {"coat": "Long", "shots_current": True}


def test_no_candidates_gives_empty_result():
    frames = build_frames()
    descriptions = frames["descriptions"].assign(description="quiet")
    result = user_preferred(build_view(descriptions=descriptions))
    assert result.empty
    assert list(result.columns) == MATCH_COLUMNS


def test_blank_filter_counts_as_unset():
    filters = PreferenceFilters(color="", breed="   ")
    assert filters.color is None
    assert filters.breed is None
    assert filters.active() == {}
    assert set(user_preferred(build_view(), filters)["match_score"]) == {9}
