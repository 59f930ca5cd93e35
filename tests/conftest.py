"""Shared fixtures for milestone engine tests."""

from datetime import date

import pytest

from milestone_engine.milestones.achievements import AchievementRecord
from milestone_engine.milestones.catalog import MilestoneCatalog, get_default_catalog
from milestone_engine.milestones.identifiers import generate_milestone_id


RAW_MILESTONES = [
    {
        "category": "motor",
        "name": "Rolls over",
        "description": "Rolls from tummy to back",
        "expected_age_months_min": 4,
        "expected_age_months_max": 6,
    },
    {
        "category": "motor",
        "name": "Sits without support",
        "description": "Sits independently",
        "expected_age_months_min": 6,
        "expected_age_months_max": 8,
    },
    {
        "category": "motor",
        "name": "Walks independently",
        "description": "Walks without assistance",
        "expected_age_months_min": 12,
        "expected_age_months_max": 15,
    },
    {
        "category": "cognitive",
        "name": "Looks for dropped objects",
        "description": "Looks for objects that fall out of sight",
        "expected_age_months_min": 6,
        "expected_age_months_max": 9,
    },
    {
        "category": "social",
        "name": "First social smile",
        "description": "Smiles in response to people",
        "expected_age_months_min": 1,
        "expected_age_months_max": 3,
    },
    {
        "category": "language",
        "name": "Says first word",
        "description": "First meaningful word",
        "expected_age_months_min": 10,
        "expected_age_months_max": 14,
    },
]


def milestone_id(category: str, name: str) -> str:
    return generate_milestone_id(category, name)


@pytest.fixture
def small_catalog() -> MilestoneCatalog:
    """Six-entry catalog covering all four categories."""
    return MilestoneCatalog.from_raw(RAW_MILESTONES)


@pytest.fixture
def default_catalog() -> MilestoneCatalog:
    """The packaged catalog."""
    return get_default_catalog()


@pytest.fixture
def make_achievement():
    """Factory for achievement records."""
    counter = {"n": 0}

    def _make(category: str, name: str, achieved_date: date, is_deleted: bool = False, **kwargs):
        counter["n"] += 1
        return AchievementRecord(
            id=kwargs.pop("id", f"entry-{counter['n']}"),
            baby_id=kwargs.pop("baby_id", "baby-1"),
            caregiver_id=kwargs.pop("caregiver_id", "caregiver-1"),
            milestone_id=milestone_id(category, name),
            achieved_date=achieved_date,
            is_deleted=is_deleted,
            **kwargs,
        )

    return _make
