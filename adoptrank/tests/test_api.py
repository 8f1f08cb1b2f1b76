from fastapi.testclient import TestClient

from adoptrank.app import app, get_config, get_dataset, get_read_models
from adoptrank.dataset.config import DataConfig
from adoptrank.errors import UpstreamUnavailable
from adoptrank.read_models.cache import MaterializedAggregates
from adoptrank.tests.sample_data import build_view

_VIEW = build_view()
app.dependency_overrides[get_dataset] = lambda: _VIEW

client = TestClient(app)


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_metadata_lists_snapshot_values():
    resp = client.get("/metadata")
    assert resp.status_code == 200
    body = resp.json()
    assert body["states"] == ["OR", "TX", "WA"]
    assert "Spokane" in body["cities"]
    assert "King County" in body["counties"]
    assert body["breeds"] == ["Beagle", "Labrador", "Poodle"]


def test_top_breed_per_state():
    resp = client.get("/top_breed_per_state")
    assert resp.status_code == 200
    rows = resp.json()
    assert {"state": "OR", "breed_primary": "Beagle", "adoption_count": 2} in rows
    assert len([r for r in rows if r["state"] == "WA"]) == 2


def test_top_breed_per_state_filtered():
    resp = client.get("/top_breed_per_state", params={"state": "OR"})
    assert resp.json() == [{"state": "OR", "breed_primary": "Beagle", "adoption_count": 2}]


def test_recommend_breeds_returns_scored_rows():
    resp = client.get("/recommend_breeds", params={"county": "King County"})
    assert resp.status_code == 200
    rows = resp.json()
    assert [r["breed"] for r in rows] == ["Poodle", "Labrador", "Beagle"]
    scores = [r["score"] for r in rows]
    assert scores == sorted(scores, reverse=True)


def test_recommend_breeds_requires_county():
    resp = client.get("/recommend_breeds")
    assert resp.status_code == 400
    assert "county" in resp.json()["detail"]


def test_recommend_breeds_unknown_county_is_empty():
    resp = client.get("/recommend_breeds", params={"county": "Nonexistent12345"})
    assert resp.status_code == 200
    assert resp.json() == []


def test_shelter_economics():
    resp = client.get("/shelter")
    assert resp.status_code == 200
    rows = resp.json()
    assert [r["org_id"] for r in rows] == ["s1", "s5", "s3"]
    assert set(rows[0]) == {
        "org_id", "city", "state", "avg_income", "avg_unemployment",
        "avg_poverty_rate", "avg_commute_time", "avg_income_per_capita",
    }


def test_supply_income():
    rows = client.get("/supply_income").json()
    assert [(r["state"], r["rank"]) for r in rows] == [("TX", 1), ("WA", 2), ("OR", 3)]


def test_over_represented():
    rows = client.get("/over_represented").json()
    beagle = [r for r in rows if r["breed_primary"] == "Beagle"]
    assert [r["state"] for r in beagle] == ["OR", "WA", "TX"]
    for r in rows:
        assert 0 < r["breed_share"] <= 1


def test_user_preferred_without_filters():
    rows = client.get("/user_preferred").json()
    assert [r["dog_id"] for r in rows] == [1, 2, 4, 6, 8, 9]
    assert {r["match_score"] for r in rows} == {9}


def test_user_preferred_with_filters():
    rows = client.get("/user_preferred", params={"color": "Tricolor", "fixed": "true"}).json()
    assert rows[0]["dog_id"] == 2
    assert rows[0]["match_score"] == 9


def test_user_preferred_blank_filter_is_ignored():
    rows = client.get("/user_preferred", params={"color": ""}).json()
    assert [r["match_score"] for r in rows] == [9, 9, 9, 9, 9, 9]


def test_income_recommend():
    resp = client.get("/income_recommend", params={"income": "95000"})
    assert resp.status_code == 200
    assert [r["breed_primary"] for r in resp.json()] == ["Beagle", "Labrador", "Poodle"]


def test_income_recommend_rejects_bad_income():
    resp = client.get("/income_recommend", params={"income": "lots"})
    assert resp.status_code == 400


def test_income_recommend_requires_income():
    assert client.get("/income_recommend").status_code == 400


def test_city_breeds():
    rows = client.get("/city_breeds").json()
    assert rows[0]["city"] == "Austin"
    assert all("rank" in r for r in rows)


def test_sample_dogs():
    resp = client.get("/sample_dogs", params={"target_state": "wa", "chosen_breed": "Beagle"})
    assert resp.status_code == 200
    assert [r["name"] for r in resp.json()] == ["Bella", "Luna"]


def test_sample_dogs_requires_parameters():
    assert client.get("/sample_dogs", params={"target_state": "WA"}).status_code == 400


def test_dogs_by_city():
    resp = client.get("/dogs_by_city", params={"city": "Austin"})
    assert resp.status_code == 200
    rows = resp.json()
    assert [r["dog_id"] for r in rows] == [9, 10, 11]
    assert rows[2]["breed_primary"] is None
    assert rows[2]["fixed"] is None


def test_dogs_by_city_requires_city():
    resp = client.get("/dogs_by_city")
    assert resp.status_code == 400
    assert "city" in resp.json()["detail"]


def test_upstream_failure_returns_empty_result():
    def _unavailable():
        raise UpstreamUnavailable("Snapshot table 'dogs' not found")

    app.dependency_overrides[get_dataset] = _unavailable
    try:
        resp = client.get("/city_breeds")
    finally:
        app.dependency_overrides[get_dataset] = lambda: _VIEW
    assert resp.status_code == 503
    assert resp.json()["results"] == []


def test_read_models_serve_same_results():
    direct = client.get("/recommend_breeds", params={"county": "King County"}).json()

    read_models = MaterializedAggregates()
    app.dependency_overrides[get_config] = lambda: DataConfig(use_read_models=True, read_model_ttl_seconds=300)
    app.dependency_overrides[get_read_models] = lambda: read_models
    try:
        cached = client.get("/recommend_breeds", params={"county": "King County"}).json()
        shares = client.get("/over_represented").json()
        stats = client.get("/read-models/stats").json()
    finally:
        app.dependency_overrides.pop(get_config)
        app.dependency_overrides.pop(get_read_models)

    assert cached == direct
    assert shares == client.get("/over_represented").json()
    assert stats["refreshes"] == 1
    assert stats["ready"] is True


def test_read_model_refresh_endpoint():
    read_models = MaterializedAggregates()
    app.dependency_overrides[get_read_models] = lambda: read_models
    try:
        resp = client.post("/read-models/refresh")
    finally:
        app.dependency_overrides.pop(get_read_models)
    assert resp.status_code == 200
    assert resp.json()["rows"]["breed_state_shares"] == 7
