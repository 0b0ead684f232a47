"""
Meal log filter engine.

Narrows a sequence of canonical records by date range, category and
symptom status. Criteria combine with AND; filtering never reorders.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, time, tzinfo, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from dietlog.domain.meal.models import MealRecord

END_OF_DAY = time(23, 59, 59, 999000)


class SymptomStatus(str, Enum):
    """Symptom filter options."""

    ANY = "any"
    WITH_SYMPTOMS = "with-symptoms"
    NO_SYMPTOMS = "no-symptoms"


class FilterCriteria(BaseModel):
    """
    Active log filters. Every field is optional.

    Example:
        >>> criteria = FilterCriteria(category="Dairy", symptom_status="with-symptoms")
        >>> criteria.category
        'dairy'
    """

    model_config = ConfigDict(frozen=True)

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    category: Optional[str] = None
    symptom_status: SymptomStatus = SymptomStatus.ANY

    @field_validator("category")
    @classmethod
    def normalize_category(cls, v: Optional[str]) -> Optional[str]:
        """Blank category means no category filter."""
        if v is None or not v.strip():
            return None
        return v.strip().lower()

    def is_empty(self) -> bool:
        """Check if no criterion is active."""
        return (
            self.start_date is None
            and self.end_date is None
            and self.category is None
            and self.symptom_status == SymptomStatus.ANY
        )


def _local_day(record: MealRecord, tz: tzinfo) -> date:
    return record.timestamp.astimezone(tz).date()


def matches(record: MealRecord, criteria: FilterCriteria, tz: tzinfo = timezone.utc) -> bool:
    """Check a single record against every active criterion."""
    if criteria.start_date is not None and _local_day(record, tz) < criteria.start_date:
        return False

    if criteria.end_date is not None:
        end_boundary = datetime.combine(criteria.end_date, END_OF_DAY, tzinfo=tz)
        if record.timestamp > end_boundary:
            return False

    if criteria.category is not None and criteria.category not in record.categories:
        return False

    if criteria.symptom_status == SymptomStatus.WITH_SYMPTOMS:
        return record.has_symptom
    if criteria.symptom_status == SymptomStatus.NO_SYMPTOMS:
        return not record.has_symptom

    return True


def filter_records(
    records: Iterable[MealRecord],
    criteria: Optional[FilterCriteria] = None,
    tz: tzinfo = timezone.utc,
) -> list[MealRecord]:
    """Return the records matching all criteria, in input order.

    Args:
        records: Canonical meal records
        criteria: Active filters; None or empty criteria keep everything
        tz: Timezone defining calendar days for the date range

    Returns:
        New list of matching records
    """
    if criteria is None or criteria.is_empty():
        return list(records)

    return [record for record in records if matches(record, criteria, tz)]


__all__ = [
    "SymptomStatus",
    "FilterCriteria",
    "matches",
    "filter_records",
]
