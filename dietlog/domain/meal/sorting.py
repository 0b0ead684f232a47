"""
Meal log sort engine.

Stable, non-mutating ordering of canonical records.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable
from enum import Enum
from typing import Optional, Union

import structlog

from dietlog.domain.meal.models import MealRecord

logger = structlog.get_logger(__name__)


class SortKey(str, Enum):
    """Sort options offered by the log listing."""

    NEWEST = "newest"
    OLDEST = "oldest"
    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"

    @classmethod
    def parse(cls, value: Union[str, "SortKey", None]) -> Optional[SortKey]:
        """Return the matching key, or None for an unknown selection."""
        if isinstance(value, SortKey):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


def collation_key(name: str) -> str:
    """Case- and accent-insensitive key, so 'Éclair' sorts with 'eclair'."""
    decomposed = unicodedata.normalize("NFKD", name)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


def sort_records(
    records: Iterable[MealRecord],
    key: Union[SortKey, str, None] = SortKey.NEWEST,
) -> list[MealRecord]:
    """Return a new list ordered by the given key.

    Records with equal keys keep their input order, for descending keys
    too. An unknown key returns the records in input order.
    """
    items = list(records)
    sort_key = SortKey.parse(key)

    if sort_key is None:
        logger.debug("Unknown sort key, keeping input order", key=key)
        return items

    if sort_key == SortKey.NEWEST:
        return sorted(items, key=lambda r: r.timestamp, reverse=True)
    if sort_key == SortKey.OLDEST:
        return sorted(items, key=lambda r: r.timestamp)
    if sort_key == SortKey.NAME_ASC:
        return sorted(items, key=lambda r: collation_key(r.food_name))
    return sorted(items, key=lambda r: collation_key(r.food_name), reverse=True)


__all__ = [
    "SortKey",
    "collation_key",
    "sort_records",
]
