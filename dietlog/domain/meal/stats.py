"""Dashboard counters over a sequence of meal records."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field, computed_field

from dietlog.domain.meal.models import MealRecord


class LogStats(BaseModel):
    """
    Aggregate counts for the currently listed meals.

    `without_symptoms` is derived from the other two counters,
    so `with_symptoms + without_symptoms == total` always holds.
    """

    model_config = ConfigDict(frozen=True)

    total: int = Field(0, ge=0)
    with_symptoms: int = Field(0, ge=0)
    category_counts: dict[str, int] = Field(default_factory=dict)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def without_symptoms(self) -> int:
        return self.total - self.with_symptoms

    def count_for(self, category: str) -> int:
        """Number of meals tagged with a category (case-insensitive)."""
        return self.category_counts.get(category.strip().lower(), 0)


def aggregate(records: Iterable[MealRecord]) -> LogStats:
    """Reduce records to dashboard counters.

    A record in two categories counts once towards each of them.
    """
    total = 0
    with_symptoms = 0
    counts: Counter[str] = Counter()

    for record in records:
        total += 1
        if record.has_symptom:
            with_symptoms += 1
        counts.update(record.categories)

    return LogStats(
        total=total,
        with_symptoms=with_symptoms,
        category_counts=dict(counts),
    )


__all__ = ["LogStats", "aggregate"]
