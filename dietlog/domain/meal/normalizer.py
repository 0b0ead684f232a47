"""
Meal record normalizer.

Transforms loosely-typed meal store records into canonical MealRecord
models, and canonical models back into the store's wire shape.

The store is not consistent about how it represents categories: a list of
strings, one comma-separated string, or a single bare string. The shape is
classified once here into a tagged union and resolved into a set; nothing
downstream branches on it again.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional, Union

import pydantic

from dietlog.domain.meal.models import MealFields, MealRecord, Reaction
from dietlog.domain.shared.errors import ValidationError


# ═══════════════════════════════════════════════════════════
# CATEGORY SHAPES
# ═══════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class CategoryList:
    """Categories sent as a list (or set) of tags."""

    members: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class DelimitedCategories:
    """Categories sent as one string: 'dairy,red-meat' or just 'dairy'."""

    text: str


@dataclass(frozen=True, slots=True)
class MissingCategories:
    """No categories field, or null."""


RawCategories = Union[CategoryList, DelimitedCategories, MissingCategories]


def classify_categories(value: Any) -> RawCategories:
    """Tag the raw categories field with its shape.

    Raises:
        ValidationError: If the value is none of the supported shapes
    """
    if value is None:
        return MissingCategories()

    if isinstance(value, str):
        return DelimitedCategories(text=value)

    if isinstance(value, (list, tuple, set, frozenset)):
        if not all(isinstance(member, str) for member in value):
            raise ValidationError("categories must contain only strings", field="categories")
        return CategoryList(members=tuple(value))

    raise ValidationError(
        f"Unsupported categories shape: {type(value).__name__}",
        field="categories",
    )


def resolve_categories(raw: RawCategories) -> frozenset[str]:
    """Resolve a classified categories field into canonical tags."""
    if isinstance(raw, CategoryList):
        parts: tuple[str, ...] = raw.members
    elif isinstance(raw, DelimitedCategories):
        parts = tuple(raw.text.split(","))
    else:
        return frozenset()

    return frozenset(part.strip().lower() for part in parts if part.strip())


# ═══════════════════════════════════════════════════════════
# NORMALIZER
# ═══════════════════════════════════════════════════════════


class MealNormalizer:
    """Maps meal store records to domain models and back."""

    @staticmethod
    def normalize(raw: Union[Mapping[str, Any], MealRecord]) -> MealRecord:
        """Convert one raw store record into a canonical MealRecord.

        Already-canonical records are returned unchanged, so normalizing
        twice is the same as normalizing once.

        Args:
            raw: Store record with wire field names
                (id, foodName, categories, timestamp, symptom, severity, notes)

        Returns:
            Canonical MealRecord

        Raises:
            ValidationError: If the record cannot be used locally

        Example:
            >>> record = MealNormalizer.normalize(
            ...     {
            ...         "id": "1",
            ...         "foodName": "Pizza",
            ...         "categories": "Dairy, gluten",
            ...         "timestamp": "2024-01-01T19:30:00Z",
            ...     }
            ... )
            >>> assert record.categories == frozenset({"dairy", "gluten"})
        """
        if isinstance(raw, MealRecord):
            return raw

        if not isinstance(raw, Mapping):
            raise ValidationError(f"Meal record must be an object, got {type(raw).__name__}")

        meal_id = _parse_id(raw.get("id"))
        food_name = raw.get("foodName")
        if not isinstance(food_name, str) or not food_name.strip():
            raise ValidationError("foodName is required", field="foodName")

        categories = resolve_categories(classify_categories(raw.get("categories")))
        timestamp = _parse_timestamp(raw.get("timestamp"))
        reaction = _parse_reaction(raw.get("symptom"), raw.get("severity"))

        notes = raw.get("notes")
        if notes is not None and not isinstance(notes, str):
            raise ValidationError("notes must be text", field="notes")

        try:
            return MealRecord(
                id=meal_id,
                food_name=food_name,
                categories=categories,
                timestamp=timestamp,
                reaction=reaction,
                notes=notes,
            )
        except pydantic.ValidationError as e:
            raise ValidationError(f"Invalid meal record {meal_id}: {e}") from e

    @staticmethod
    def to_payload(item: MealFields) -> dict[str, Any]:
        """Serialize a record or draft into the store's wire shape.

        Categories are sent as one comma-separated string. Severity is
        only sent with its symptom; blank notes are omitted.

        Example:
            >>> payload = MealNormalizer.to_payload(record)
            >>> payload["categories"]
            'dairy,red-meat'
        """
        payload: dict[str, Any] = {
            "foodName": item.food_name,
            "categories": ",".join(sorted(item.categories)),
            "timestamp": _format_timestamp(item.timestamp),
        }

        if item.reaction is not None:
            payload["symptom"] = item.reaction.symptom
            if item.reaction.severity is not None:
                payload["severity"] = item.reaction.severity

        if item.notes:
            payload["notes"] = item.notes

        return payload


# ═══════════════════════════════════════════════════════════
# FIELD PARSERS
# ═══════════════════════════════════════════════════════════


def _parse_id(value: Any) -> str:
    if isinstance(value, bool) or value is None:
        raise ValidationError("id is required", field="id")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, str) and value.strip():
        return value.strip()
    raise ValidationError("id is required", field="id")


def _parse_timestamp(value: Any) -> datetime:
    """Parse an ISO-8601 string (or datetime) into an aware UTC datetime."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError as e:
            raise ValidationError(f"Invalid timestamp: {value!r}", field="timestamp") from e
    else:
        raise ValidationError("timestamp is required", field="timestamp")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _format_timestamp(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _parse_severity(value: Any) -> int:
    if isinstance(value, bool):
        raise ValidationError("severity must be an integer", field="severity")

    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError as e:
            raise ValidationError(f"Invalid severity: {value!r}", field="severity") from e

    if isinstance(value, float):
        if not value.is_integer():
            raise ValidationError(f"Invalid severity: {value!r}", field="severity")
        value = int(value)

    if not isinstance(value, int):
        raise ValidationError("severity must be an integer", field="severity")

    if not 1 <= value <= 10:
        raise ValidationError(f"severity must be between 1 and 10, got {value}", field="severity")

    return value


def _parse_reaction(symptom: Any, severity: Any) -> Optional[Reaction]:
    if symptom is not None and not isinstance(symptom, str):
        raise ValidationError("symptom must be text", field="symptom")

    has_symptom = bool(symptom and symptom.strip())
    has_severity = severity is not None and severity != ""

    if not has_symptom:
        if has_severity:
            raise ValidationError("severity given without a symptom", field="severity")
        return None

    if not has_severity:
        return Reaction(symptom=symptom)

    return Reaction(symptom=symptom, severity=_parse_severity(severity))


__all__ = [
    "CategoryList",
    "DelimitedCategories",
    "MissingCategories",
    "RawCategories",
    "classify_categories",
    "resolve_categories",
    "MealNormalizer",
]
