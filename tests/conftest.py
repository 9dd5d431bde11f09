"""Shared test configuration, pytest markers and catalog fixtures."""

import copy

import pytest

from scan_scoring.services.scoring import registry
from scan_scoring.services.scoring.catalog import load_catalog, parse_catalog

# Small hand-checked catalog: weights and importances chosen so results can be
# worked out on paper.
DEMO_CATALOG = {
    "domain": "demo",
    "version": "test-1",
    "document_noun": "Resume",
    "score_range": [0, 10],
    "benchmarks": {
        "a": {"label": "alpha"},
        "b": {"label": "beta"},
        "c": {"label": "gamma"},
        "d": {"label": "delta"},
        "e": {"label": "epsilon"},
    },
    "sections": [
        {"name": "One", "benchmarks": ["a", "b"]},
        {"name": "Two", "benchmarks": ["c", "d"]},
        {"name": "Three", "benchmarks": ["e"]},
    ],
    "weights": {"default": {"a": 8, "b": 2, "c": 5, "d": 5, "e": 3}},
    "experience_modifiers": {"entry": {"b": 0.1}},
    "section_importance": {"default": {"One": 0.4, "Two": 0.4, "Three": 0.2}},
    "critical_benchmarks": ["a"],
    "industry_combos": [
        {
            "keywords": ["tech"],
            "rules": [
                {"sections": {"One": 8, "Two": 8}, "factor": 1.06},
                {"sections": {"One": 8}, "factor": 1.03},
            ],
        }
    ],
}


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "catalog: checks the shipped curated tables"
    )


@pytest.fixture
def demo_data():
    return copy.deepcopy(DEMO_CATALOG)


@pytest.fixture
def demo_catalog(demo_data):
    return parse_catalog(demo_data)


@pytest.fixture(scope="session")
def resume_catalog():
    return load_catalog("resume")


@pytest.fixture(scope="session")
def profile_catalog():
    return load_catalog("profile")


@pytest.fixture(autouse=True)
def _reset_registry():
    registry.clear()
    yield
    registry.clear()
