"""
Unit tests for meal domain models.

Tests MealRecord, MealDraft and Reaction validation and immutability.
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from dietlog.domain.meal.models import MealDraft, MealRecord, Reaction


class TestReaction:
    """Test suite for Reaction value object."""

    def test_symptom_normalized(self) -> None:
        assert Reaction(symptom="  Bloating ", severity=4).symptom == "bloating"

    def test_severity_optional(self) -> None:
        reaction = Reaction(symptom="gas")
        assert reaction.severity is None

    @pytest.mark.parametrize("severity", [0, 11, -1])
    def test_severity_out_of_range(self, severity: int) -> None:
        with pytest.raises(ValidationError):
            Reaction(symptom="gas", severity=severity)

    def test_blank_symptom_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Reaction(symptom="   ", severity=3)


class TestMealRecord:
    """Test suite for MealRecord model."""

    def test_minimal_record(self) -> None:
        timestamp = datetime(2024, 1, 15, 12, 30, tzinfo=timezone.utc)

        record = MealRecord(id="m1", food_name=" Salad ", timestamp=timestamp)

        assert record.food_name == "Salad"
        assert record.categories == frozenset()
        assert record.categories_unspecified
        assert record.reaction is None
        assert record.symptom is None
        assert record.severity is None
        assert not record.has_symptom

    def test_categories_canonicalized(self) -> None:
        record = MealRecord(
            id="m1",
            food_name="Burger",
            categories=frozenset({" Dairy", "RED-MEAT", " "}),
            timestamp=datetime(2024, 1, 15, tzinfo=timezone.utc),
        )
        assert record.categories == frozenset({"dairy", "red-meat"})

    def test_reaction_exposed(self) -> None:
        record = MealRecord(
            id="m1",
            food_name="Burger",
            timestamp=datetime(2024, 1, 15, tzinfo=timezone.utc),
            reaction=Reaction(symptom="cramps", severity=8),
        )
        assert record.has_symptom
        assert record.symptom == "cramps"
        assert record.severity == 8

    def test_record_is_frozen(self) -> None:
        record = MealRecord(id="m1", food_name="Tea", timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc))
        with pytest.raises(ValidationError):
            record.food_name = "Coffee"  # type: ignore[misc]

    @pytest.mark.parametrize("food_name", ["", "   "])
    def test_empty_name_rejected(self, food_name: str) -> None:
        with pytest.raises(ValidationError):
            MealRecord(id="m1", food_name=food_name, timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc))

    def test_with_fields_keeps_id(self) -> None:
        record = MealRecord(id="m1", food_name="Tea", timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc))
        draft = MealDraft(
            food_name="Coffee",
            categories=frozenset({"caffeine"}),
            timestamp=datetime(2024, 1, 2, tzinfo=timezone.utc),
        )

        updated = record.with_fields(draft)

        assert updated.id == "m1"
        assert updated.food_name == "Coffee"
        assert updated.categories == frozenset({"caffeine"})


class TestMealDraft:
    """Test suite for MealDraft model."""

    def test_draft_requires_category(self) -> None:
        with pytest.raises(ValidationError):
            MealDraft(food_name="Toast", timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc))

    def test_blank_categories_do_not_count(self) -> None:
        with pytest.raises(ValidationError):
            MealDraft(
                food_name="Toast",
                categories=frozenset({"  "}),
                timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
            )
