"""Unit tests for the meal log filter engine."""

from datetime import date, datetime, timezone
from typing import Any
from zoneinfo import ZoneInfo

import pytest

from dietlog.domain.meal.filters import FilterCriteria, SymptomStatus, filter_records
from dietlog.domain.meal.models import MealRecord


def ids(records: list[MealRecord]) -> list[str]:
    return [record.id for record in records]


class TestFilterCriteria:
    def test_default_is_empty(self) -> None:
        assert FilterCriteria().is_empty()

    def test_blank_category_is_no_filter(self) -> None:
        criteria = FilterCriteria(category="  ")
        assert criteria.category is None
        assert criteria.is_empty()

    def test_symptom_status_from_select_value(self) -> None:
        criteria = FilterCriteria(symptom_status="no-symptoms")
        assert criteria.symptom_status == SymptomStatus.NO_SYMPTOMS


class TestFilterRecords:
    """Tests for filter_records."""

    def test_no_criteria_is_identity(self, sample_records: list[MealRecord]) -> None:
        assert filter_records(sample_records) == sample_records
        assert filter_records(sample_records, FilterCriteria()) == sample_records

    def test_returns_new_list(self, sample_records: list[MealRecord]) -> None:
        result = filter_records(sample_records)
        assert result is not sample_records

    def test_start_date_inclusive(self, sample_records: list[MealRecord]) -> None:
        result = filter_records(sample_records, FilterCriteria(start_date=date(2024, 1, 12)))
        assert ids(result) == ["c", "d", "e"]

    def test_end_date_includes_whole_day(self, sample_records: list[MealRecord]) -> None:
        result = filter_records(sample_records, FilterCriteria(end_date=date(2024, 1, 14)))
        assert ids(result) == ["a", "b", "c", "d", "e"]

    def test_end_date_excludes_next_day(self, sample_records: list[MealRecord]) -> None:
        result = filter_records(sample_records, FilterCriteria(end_date=date(2024, 1, 11)))
        assert ids(result) == ["a", "b"]

    def test_date_range(self, sample_records: list[MealRecord]) -> None:
        criteria = FilterCriteria(start_date=date(2024, 1, 11), end_date=date(2024, 1, 12))
        assert ids(filter_records(sample_records, criteria)) == ["b", "c"]

    def test_day_boundary_follows_timezone(self, record_factory: Any) -> None:
        """23:30 UTC on Jan 14 is already Jan 15 in Rome."""
        late = record_factory("late", timestamp=datetime(2024, 1, 14, 23, 30, tzinfo=timezone.utc))
        criteria = FilterCriteria(end_date=date(2024, 1, 14))

        assert ids(filter_records([late], criteria, timezone.utc)) == ["late"]
        assert filter_records([late], criteria, ZoneInfo("Europe/Rome")) == []

        from_15th = FilterCriteria(start_date=date(2024, 1, 15))
        assert ids(filter_records([late], from_15th, ZoneInfo("Europe/Rome"))) == ["late"]

    @pytest.mark.parametrize("category", ["dairy", "DAIRY", " Dairy "])
    def test_category_case_insensitive(self, sample_records: list[MealRecord], category: str) -> None:
        result = filter_records(sample_records, FilterCriteria(category=category))
        assert ids(result) == ["a", "c"]

    def test_empty_categories_never_match(self, sample_records: list[MealRecord]) -> None:
        result = filter_records(sample_records, FilterCriteria(category="snack"))
        assert result == []

    def test_with_symptoms(self, sample_records: list[MealRecord]) -> None:
        result = filter_records(sample_records, FilterCriteria(symptom_status=SymptomStatus.WITH_SYMPTOMS))
        assert ids(result) == ["b", "c"]

    def test_without_symptoms(self, sample_records: list[MealRecord]) -> None:
        result = filter_records(sample_records, FilterCriteria(symptom_status=SymptomStatus.NO_SYMPTOMS))
        assert ids(result) == ["a", "d", "e"]

    def test_criteria_combine_with_and(self, sample_records: list[MealRecord]) -> None:
        criteria = FilterCriteria(
            category="red-meat",
            symptom_status=SymptomStatus.WITH_SYMPTOMS,
            start_date=date(2024, 1, 12),
        )
        assert ids(filter_records(sample_records, criteria)) == ["c"]

    def test_input_order_preserved(self, sample_records: list[MealRecord]) -> None:
        shuffled = [sample_records[3], sample_records[0], sample_records[2]]
        result = filter_records(shuffled, FilterCriteria(end_date=date(2024, 1, 31)))
        assert ids(result) == ["d", "a", "c"]

    def test_additional_criterion_never_grows_result(self, sample_records: list[MealRecord]) -> None:
        steps = [
            FilterCriteria(),
            FilterCriteria(start_date=date(2024, 1, 11)),
            FilterCriteria(start_date=date(2024, 1, 11), category="red-meat"),
            FilterCriteria(
                start_date=date(2024, 1, 11),
                category="red-meat",
                symptom_status=SymptomStatus.WITH_SYMPTOMS,
            ),
            FilterCriteria(
                start_date=date(2024, 1, 11),
                end_date=date(2024, 1, 11),
                category="red-meat",
                symptom_status=SymptomStatus.WITH_SYMPTOMS,
            ),
        ]

        sizes = [len(filter_records(sample_records, criteria)) for criteria in steps]

        assert sizes == sorted(sizes, reverse=True)
        assert sizes[-1] == 1
