"""Pytest configuration and shared fixtures for tests."""

import pytest

from src.core.config import config
from src.core.dataset import Dataset
from src.core.models import DimensionHierarchy

ENV_NAMES = (
    "API_BASE_PATH",
    "CONNECTION_DEFAULT_CUT",
    "LOG_LEVEL",
    "DATASET_ID",
    "VISUALISATION_ID",
)


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Reload configuration from a known environment for every test.

    Each name is set before it is deleted so monkeypatch also removes values
    a test loads from a ``.env`` file.
    """
    for name in ENV_NAMES:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    config.reload()
    yield
    config.reload()


@pytest.fixture
def dataset():
    """Provide an empty dataset with one hierarchical dimension."""
    return Dataset(
        id="ds1",
        cut={"gender": "f"},
        hierarchies={
            "region": DimensionHierarchy(
                dimension="region", level_field="level", levels=["country", "county"]
            )
        },
    )


@pytest.fixture
def element_attrs():
    """Provide a single-dimension element definition."""
    return {
        "id": "el1",
        "measure": {"id": "count"},
        "aggregation": "sum",
        "measure_label": "People",
        "dimensions": [{"field": {"id": "age"}, "bucket": 5}],
    }


@pytest.fixture
def age_dimension_rows():
    return [
        {"id": "a1", "label": "0-4"},
        {"id": "a2", "label": "5-9"},
    ]


@pytest.fixture
def age_observation_payload():
    return {
        "data": [
            {"id": "a1", "total": 10},
            {"id": "a2", "total": 32},
        ],
        "total": 42,
    }

