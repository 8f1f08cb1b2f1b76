from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from .analytics.breeds import city_breeds as compute_city_breeds
from .analytics.breeds import top_breed_per_state as compute_top_breed_per_state
from .analytics.dogs import dogs_by_city as compute_dogs_by_city
from .analytics.dogs import sample_dogs as compute_sample_dogs
from .analytics.income import income_recommend as compute_income_recommend
from .analytics.income import supply_income as compute_supply_income
from .analytics.shares import over_represented as compute_over_represented
from .analytics.shelters import shelter_economics as compute_shelter_economics
from .dataset.config import DEFAULT_DATA_CONFIG, DataConfig
from .dataset.loader import load_dataset
from .dataset.view import DatasetView
from .errors import ClientError, UpstreamUnavailable
from .models import (
    BreedRecommendation,
    CityBreedRow,
    CityDog,
    IncomeRecommendation,
    MetadataResponse,
    OverRepresentedRow,
    PreferredDog,
    SampleDog,
    ShelterEconomicsRow,
    SupplyIncomeRow,
    TopBreedRow,
    to_records,
)
from .read_models.base import AggregateSource
from .read_models.cache import DirectAggregates, MaterializedAggregates
from .scoring.preferences import PreferenceFilters
from .scoring.preferences import user_preferred as compute_user_preferred
from .scoring.suitability import recommend_breeds as compute_recommend_breeds

logger = logging.getLogger(__name__)

app = FastAPI(title="Dog Adoption Ranking API", version="1.0.0")
app.state.config = DEFAULT_DATA_CONFIG
app.state.dataset = None
app.state.read_models = MaterializedAggregates()


# ── Dependencies ─────────────────────────────────────────────────────────


def get_config(request: Request) -> DataConfig:
    return request.app.state.config


def get_dataset(request: Request) -> DatasetView:
    """Return the snapshot held by this app, loading it on first use."""
    dataset = request.app.state.dataset
    if dataset is None:
        dataset = load_dataset(request.app.state.config)
        request.app.state.dataset = dataset
    return dataset


def get_read_models(request: Request) -> MaterializedAggregates:
    return request.app.state.read_models


def get_aggregates(
    dataset: DatasetView = Depends(get_dataset),
    config: DataConfig = Depends(get_config),
    read_models: MaterializedAggregates = Depends(get_read_models),
) -> AggregateSource:
    """Serve aggregates from the read models when enabled, else compute them."""
    if not config.use_read_models:
        return DirectAggregates(dataset)
    read_models.bind(dataset, config.read_model_ttl_seconds)
    return read_models


# ── Error mapping ────────────────────────────────────────────────────────


@app.exception_handler(ClientError)
async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(UpstreamUnavailable)
async def upstream_error_handler(request: Request, exc: UpstreamUnavailable) -> JSONResponse:
    logger.error("Data source unavailable for %s", request.url.path, exc_info=exc)
    return JSONResponse(status_code=503, content={"detail": str(exc), "results": []})


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata", response_model=MetadataResponse)
def metadata(dataset: DatasetView = Depends(get_dataset)) -> MetadataResponse:
    def _distinct(series) -> list[str]:
        return sorted(str(v) for v in series.dropna().unique())

    return MetadataResponse(
        states=_distinct(dataset.shelters["state"]),
        cities=_distinct(dataset.shelters["city"]),
        counties=_distinct(dataset.tracts["county"]),
        breeds=_distinct(dataset.breeds["breed_primary"]),
    )


# ── Analytic endpoints ───────────────────────────────────────────────────


@app.get("/top_breed_per_state", response_model=list[TopBreedRow])
def top_breed_per_state(
    state: str | None = None,
    dataset: DatasetView = Depends(get_dataset),
) -> list[dict]:
    return to_records(compute_top_breed_per_state(dataset, state))


@app.get("/recommend_breeds", response_model=list[BreedRecommendation])
def recommend_breeds(
    county: str | None = None,
    aggregates: AggregateSource = Depends(get_aggregates),
) -> list[dict]:
    return to_records(compute_recommend_breeds(aggregates, county))


@app.get("/shelter", response_model=list[ShelterEconomicsRow])
def shelter(dataset: DatasetView = Depends(get_dataset)) -> list[dict]:
    return to_records(compute_shelter_economics(dataset))


@app.get("/supply_income", response_model=list[SupplyIncomeRow])
def supply_income(dataset: DatasetView = Depends(get_dataset)) -> list[dict]:
    return to_records(compute_supply_income(dataset))


@app.get("/over_represented", response_model=list[OverRepresentedRow])
def over_represented(aggregates: AggregateSource = Depends(get_aggregates)) -> list[dict]:
    return to_records(compute_over_represented(aggregates))


@app.get("/user_preferred", response_model=list[PreferredDog])
def user_preferred(
    filters: PreferenceFilters = Depends(),
    dataset: DatasetView = Depends(get_dataset),
) -> list[dict]:
    return to_records(compute_user_preferred(dataset, filters))


@app.get("/income_recommend", response_model=list[IncomeRecommendation])
def income_recommend(
    income: str | None = None,
    dataset: DatasetView = Depends(get_dataset),
) -> list[dict]:
    return to_records(compute_income_recommend(dataset, income))


@app.get("/city_breeds", response_model=list[CityBreedRow])
def city_breeds(dataset: DatasetView = Depends(get_dataset)) -> list[dict]:
    return to_records(compute_city_breeds(dataset))


@app.get("/sample_dogs", response_model=list[SampleDog])
def sample_dogs(
    target_state: str | None = None,
    chosen_breed: str | None = None,
    dataset: DatasetView = Depends(get_dataset),
) -> list[dict]:
    return to_records(compute_sample_dogs(dataset, target_state, chosen_breed))


@app.get("/dogs_by_city", response_model=list[CityDog])
def dogs_by_city(
    city: str | None = None,
    dataset: DatasetView = Depends(get_dataset),
) -> list[dict]:
    return to_records(compute_dogs_by_city(dataset, city))


# ── Read model endpoints ─────────────────────────────────────────────────


@app.get("/read-models/stats")
def read_model_stats(read_models: MaterializedAggregates = Depends(get_read_models)) -> dict:
    return read_models.stats()


@app.post("/read-models/refresh")
def refresh_read_models(
    dataset: DatasetView = Depends(get_dataset),
    read_models: MaterializedAggregates = Depends(get_read_models),
) -> dict:
    read_models.refresh(dataset)
    return read_models.stats()
