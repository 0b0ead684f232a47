"""
Meal log domain models.

Canonical, immutable representation of a logged meal.
Every component downstream of the normalizer operates on these models only.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Reaction(BaseModel):
    """
    Symptom reported after a meal, with its severity.

    Symptom and severity live in one optional structure so a meal
    can never carry a severity without a symptom. Severity itself
    is optional; a symptom may be logged without rating it.

    Example:
        >>> reaction = Reaction(symptom="Bloating", severity=6)
        >>> assert reaction.symptom == "bloating"
    """

    model_config = ConfigDict(frozen=True)

    symptom: str = Field(..., min_length=1, description="Reaction tag, e.g. 'bloating'")
    severity: Optional[int] = Field(None, ge=1, le=10, description="Severity from 1 to 10")

    @field_validator("symptom")
    @classmethod
    def normalize_symptom(cls, v: str) -> str:
        """Trim and lowercase; reject blank tags."""
        v = v.strip().lower()
        if not v:
            raise ValueError("Symptom cannot be empty or whitespace")
        return v


class MealFields(BaseModel):
    """Fields shared by stored records and unsaved drafts."""

    model_config = ConfigDict(frozen=True)

    food_name: str = Field(..., min_length=1, description="Display name")
    categories: frozenset[str] = Field(default_factory=frozenset)
    timestamp: datetime = Field(..., description="When the meal was eaten")
    reaction: Optional[Reaction] = None
    notes: Optional[str] = None

    @field_validator("food_name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        """Ensure name is not just whitespace."""
        if not v.strip():
            raise ValueError("Food name cannot be empty or whitespace")
        return v.strip()

    @field_validator("categories")
    @classmethod
    def canonical_categories(cls, v: frozenset[str]) -> frozenset[str]:
        """Lowercase and trim tags, dropping blanks."""
        return frozenset(tag.strip().lower() for tag in v if tag.strip())

    @field_validator("timestamp")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        """Naive datetimes are taken as UTC; aware ones are converted."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    @field_validator("notes")
    @classmethod
    def blank_notes_absent(cls, v: Optional[str]) -> Optional[str]:
        """Empty notes mean no notes."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @property
    def symptom(self) -> Optional[str]:
        return self.reaction.symptom if self.reaction else None

    @property
    def severity(self) -> Optional[int]:
        return self.reaction.severity if self.reaction else None

    @property
    def has_symptom(self) -> bool:
        """Check if a reaction was reported."""
        return self.reaction is not None

    @property
    def categories_unspecified(self) -> bool:
        return not self.categories


class MealDraft(MealFields):
    """
    A meal not yet saved to the store.

    Requires at least one category, as the logging form does.

    Example:
        >>> draft = MealDraft(
        ...     food_name="Greek yogurt",
        ...     categories=frozenset({"dairy"}),
        ...     timestamp=datetime(2024, 1, 15, 8, 0, tzinfo=timezone.utc),
        ... )
    """

    categories: frozenset[str] = Field(..., description="At least one category tag")

    @field_validator("categories")
    @classmethod
    def at_least_one_category(cls, v: frozenset[str]) -> frozenset[str]:
        """Drafts must carry a category."""
        if not v:
            raise ValueError("Select at least one category")
        return v


class MealRecord(MealFields):
    """
    Canonical meal record as mirrored from the store.

    Immutable once constructed. `id` is opaque and unique within a dataset.

    Example:
        >>> record = MealRecord(
        ...     id="m1",
        ...     food_name="Cheeseburger",
        ...     categories=frozenset({"dairy", "red-meat"}),
        ...     timestamp=datetime(2024, 1, 15, 12, 30, tzinfo=timezone.utc),
        ...     reaction=Reaction(symptom="bloating", severity=4),
        ... )
        >>> assert record.has_symptom
    """

    id: str = Field(..., min_length=1, description="Store identifier")

    @field_validator("id")
    @classmethod
    def id_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Meal id cannot be blank")
        return v.strip()

    def with_fields(self, draft: MealFields) -> MealRecord:
        """Create a record carrying this id and the draft's fields."""
        return MealRecord(
            id=self.id,
            food_name=draft.food_name,
            categories=draft.categories,
            timestamp=draft.timestamp,
            reaction=draft.reaction,
            notes=draft.notes,
        )


__all__ = [
    "Reaction",
    "MealFields",
    "MealDraft",
    "MealRecord",
]
