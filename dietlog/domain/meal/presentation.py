"""
Display data for meal entries.

Returns labels and strings only; rendering is the caller's business.
"""

from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo
from typing import Optional

from pydantic import BaseModel, ConfigDict

from dietlog.domain.meal.filters import FilterCriteria
from dietlog.domain.meal.models import MealRecord
from dietlog.domain.meal.recency import format_recency

MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

UNSPECIFIED_CATEGORIES = "Not specified"
NO_SYMPTOMS = "No symptoms"
ALL_TIME = "All Time"


class EntrySummary(BaseModel):
    """Display fields for one entry card."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    time_label: str
    category_label: str
    reaction_label: str
    notes: Optional[str] = None
    warning: bool = False


def capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def category_label(record: MealRecord) -> str:
    """'Dairy, Red-meat', or 'Not specified' for an empty set."""
    if record.categories_unspecified:
        return UNSPECIFIED_CATEGORIES
    return ", ".join(capitalize_first(tag) for tag in sorted(record.categories))


def reaction_label(record: MealRecord) -> str:
    """'Bloating - Severity 7', 'Bloating' when unrated, or 'No symptoms'."""
    if record.reaction is None:
        return NO_SYMPTOMS
    symptom = capitalize_first(record.reaction.symptom)
    if record.reaction.severity is None:
        return symptom
    return f"{symptom} - Severity {record.reaction.severity}"


def _short_date(day: date) -> str:
    return f"{MONTH_ABBR[day.month - 1]} {day.day}"


def timestamp_label(timestamp: datetime, tz: tzinfo = timezone.utc) -> str:
    """Absolute timestamp, e.g. 'Jan 15, 2024, 09:05 AM'."""
    local = timestamp.astimezone(tz)
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return f"{_short_date(local.date())}, {local.year}, {hour:02d}:{local.minute:02d} {meridiem}"


def count_label(count: int) -> str:
    return f"({count} log{'' if count == 1 else 's'})"


def date_range_label(criteria: FilterCriteria) -> str:
    """Describe the active date range, e.g. 'Jan 5 - Jan 9' or 'All Time'."""
    start, end = criteria.start_date, criteria.end_date
    if start and end:
        return f"{_short_date(start)} - {_short_date(end)}"
    if start:
        return f"From {_short_date(start)}"
    if end:
        return f"Until {_short_date(end)}"
    return ALL_TIME


def describe_entry(
    record: MealRecord,
    now: datetime,
    tz: tzinfo = timezone.utc,
    relative: bool = True,
) -> EntrySummary:
    """Build display fields for an entry card.

    The dashboard shows relative time; the log listing shows the
    absolute timestamp (relative=False).
    """
    time_label = format_recency(record.timestamp, now, tz) if relative else timestamp_label(record.timestamp, tz)
    return EntrySummary(
        id=record.id,
        title=record.food_name,
        time_label=time_label,
        category_label=category_label(record),
        reaction_label=reaction_label(record),
        notes=record.notes,
        warning=record.has_symptom,
    )


__all__ = [
    "EntrySummary",
    "category_label",
    "reaction_label",
    "timestamp_label",
    "count_label",
    "date_range_label",
    "describe_entry",
]
