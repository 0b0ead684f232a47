"""
Shared fixtures for dietlog tests.

Raw records use the store's wire field names; canonical records are
MealRecord models built directly.
"""

from datetime import datetime, timezone
from typing import Any
from unittest.mock import AsyncMock

import pytest

from dietlog.domain.meal.models import MealRecord, Reaction
from dietlog.domain.meal.ports import IMealStore
from dietlog.application.meal_log.view_cache import MealLogView
from dietlog.infrastructure.meal_api.in_memory_store import InMemoryMealStore


# ═══════════════════════════════════════════════════════════
# RAW STORE RECORD FIXTURES
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def raw_bloating_meal() -> dict[str, Any]:
    """Meal with a reported symptom, categories as a list."""
    return {
        "id": "1",
        "foodName": "Cheeseburger",
        "categories": ["Dairy", " red-meat "],
        "timestamp": "2024-01-01T10:00:00Z",
        "symptom": "bloating",
        "severity": 6,
    }


@pytest.fixture
def raw_plain_meal() -> dict[str, Any]:
    """Meal without symptoms, categories as a comma-separated string."""
    return {
        "id": "2",
        "foodName": "Oatmeal",
        "categories": "grains, fruit",
        "timestamp": "2024-01-02T10:00:00Z",
        "notes": "",
    }


@pytest.fixture
def raw_records(raw_bloating_meal: dict[str, Any], raw_plain_meal: dict[str, Any]) -> list[dict[str, Any]]:
    return [raw_bloating_meal, raw_plain_meal]


# ═══════════════════════════════════════════════════════════
# CANONICAL RECORD FIXTURES
# ═══════════════════════════════════════════════════════════


def make_record(
    meal_id: str,
    food_name: str = "Meal",
    timestamp: datetime = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc),
    categories: tuple[str, ...] = (),
    symptom: str | None = None,
    severity: int | None = 5,
    notes: str | None = None,
) -> MealRecord:
    """Build a canonical record with sensible defaults."""
    return MealRecord(
        id=meal_id,
        food_name=food_name,
        categories=frozenset(categories),
        timestamp=timestamp,
        reaction=Reaction(symptom=symptom, severity=severity) if symptom else None,
        notes=notes,
    )


@pytest.fixture
def sample_records() -> list[MealRecord]:
    """Five meals across a week, mixed categories and symptoms."""
    return [
        make_record(
            "a",
            "Yogurt",
            datetime(2024, 1, 10, 8, 0, tzinfo=timezone.utc),
            ("dairy",),
        ),
        make_record(
            "b",
            "Steak",
            datetime(2024, 1, 11, 19, 0, tzinfo=timezone.utc),
            ("red-meat",),
            symptom="bloating",
            severity=7,
        ),
        make_record(
            "c",
            "Cheeseburger",
            datetime(2024, 1, 12, 13, 0, tzinfo=timezone.utc),
            ("dairy", "red-meat"),
            symptom="cramps",
            severity=3,
        ),
        make_record(
            "d",
            "apple",
            datetime(2024, 1, 13, 16, 0, tzinfo=timezone.utc),
            ("fruit",),
        ),
        make_record(
            "e",
            "Mystery snack",
            datetime(2024, 1, 14, 23, 30, tzinfo=timezone.utc),
        ),
    ]


# ═══════════════════════════════════════════════════════════
# STORE FIXTURES
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def in_memory_store(raw_records: list[dict[str, Any]]) -> InMemoryMealStore:
    """In-memory store seeded with the two raw records."""
    return InMemoryMealStore(raw_records)


@pytest.fixture
def mock_store(raw_records: list[dict[str, Any]]) -> AsyncMock:
    """Mock meal store.

    Default behavior: list_all returns the two raw records.
    Override in tests with side effects for failures.
    """
    store = AsyncMock(spec=IMealStore)
    store.list_all.return_value = raw_records
    store.delete.return_value = {"message": "deleted"}
    return store


@pytest.fixture
def view(mock_store: AsyncMock) -> MealLogView:
    """Meal log view over the mock store."""
    return MealLogView(mock_store)


@pytest.fixture
def record_factory() -> Any:
    """Factory building canonical records, see make_record."""
    return make_record
