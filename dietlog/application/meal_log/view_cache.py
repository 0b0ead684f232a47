"""
Meal Log View.

Owns the local mirror of the meal store and the derived (filtered and
sorted) view over it.

Flow:
1. refresh() replaces the full set with the normalized store collection
2. apply_filter_and_sort() recomputes the derived view locally
3. remove() / upsert() change the full set only after the store confirms

There is no optimistic update: a failed store call leaves both the full
set and the derived view exactly as they were.
"""

from __future__ import annotations

from datetime import timezone, tzinfo
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

import structlog
from pydantic import BaseModel, ConfigDict, Field

from dietlog.domain.meal.filters import FilterCriteria, filter_records
from dietlog.domain.meal.models import MealDraft, MealRecord
from dietlog.domain.meal.normalizer import MealNormalizer
from dietlog.domain.meal.ports import IMealStore
from dietlog.domain.meal.sorting import SortKey, sort_records
from dietlog.domain.meal.stats import LogStats, aggregate
from dietlog.domain.shared.errors import RemoteError, StoreError, ValidationError

logger = structlog.get_logger(__name__)

DEFAULT_SORT = SortKey.NEWEST


class RejectedRecord(BaseModel):
    """A store record dropped during refresh because it failed normalization."""

    model_config = ConfigDict(frozen=True)

    index: int
    meal_id: Optional[str] = None
    reason: str


class RefreshReport(BaseModel):
    """Outcome of a refresh."""

    model_config = ConfigDict(frozen=True)

    total: int = Field(..., ge=0, description="Records now in the full set")
    loaded: int = Field(..., ge=0, description="Records that normalized, duplicates included")
    rejected: tuple[RejectedRecord, ...] = ()

    @property
    def rejected_count(self) -> int:
        return len(self.rejected)


class MealLogView:
    """Controller holding the full set and the derived view.

    One instance per session; there is no module-level state.

    Example:
        >>> view = MealLogView(store)
        >>> report = await view.refresh()
        >>> view.apply_filter_and_sort(FilterCriteria(category="dairy"))
        >>> view.stats.total
    """

    def __init__(
        self,
        store: IMealStore,
        tz: tzinfo = timezone.utc,
        recent_limit: int = 5,
    ) -> None:
        """Initialize an empty view.

        Args:
            store: Meal store port
            tz: Timezone defining calendar days for date filters
            recent_limit: Default number of dashboard recent entries
        """
        self.store = store
        self.tz = tz
        self.recent_limit = recent_limit
        self._full_set: dict[str, MealRecord] = {}
        self._derived_view: tuple[MealRecord, ...] = ()
        self._criteria = FilterCriteria()
        self._sort_key: Union[SortKey, str] = DEFAULT_SORT

    # ═══════════════════════════════════════════════════════════
    # READ ACCESSORS
    # ═══════════════════════════════════════════════════════════

    @property
    def full_set(self) -> Mapping[str, MealRecord]:
        """Read-only mapping of id to record."""
        return MappingProxyType(self._full_set)

    @property
    def derived_view(self) -> tuple[MealRecord, ...]:
        return self._derived_view

    @property
    def criteria(self) -> FilterCriteria:
        return self._criteria

    @property
    def sort_key(self) -> Union[SortKey, str]:
        return self._sort_key

    @property
    def stats(self) -> LogStats:
        """Counters over the derived view, matching what is listed."""
        return aggregate(self._derived_view)

    def get(self, meal_id: str) -> Optional[MealRecord]:
        return self._full_set.get(meal_id)

    def recent(self, limit: Optional[int] = None) -> list[MealRecord]:
        """Most recent entries across the full set, newest first."""
        count = self.recent_limit if limit is None else limit
        return sort_records(self._full_set.values(), SortKey.NEWEST)[:count]

    # ═══════════════════════════════════════════════════════════
    # LOCAL RECOMPUTATION
    # ═══════════════════════════════════════════════════════════

    def apply_filter_and_sort(
        self,
        criteria: Optional[FilterCriteria] = None,
        sort_key: Union[SortKey, str, None] = None,
    ) -> tuple[MealRecord, ...]:
        """Recompute the derived view from the full set.

        Args:
            criteria: New filter criteria; None keeps the active ones
            sort_key: New sort key; None keeps the active one. Unknown
                keys keep the full set's order.

        Returns:
            The new derived view
        """
        if criteria is not None:
            self._criteria = criteria
        if sort_key is not None:
            self._sort_key = sort_key

        filtered = filter_records(self._full_set.values(), self._criteria, self.tz)
        self._derived_view = tuple(sort_records(filtered, self._sort_key))
        return self._derived_view

    def reset_filters(self) -> tuple[MealRecord, ...]:
        """Clear all filters and restore the default sort."""
        return self.apply_filter_and_sort(FilterCriteria(), DEFAULT_SORT)

    # ═══════════════════════════════════════════════════════════
    # STORE OPERATIONS
    # ═══════════════════════════════════════════════════════════

    async def refresh(self) -> RefreshReport:
        """Replace the full set with the store's current collection.

        Records that fail normalization are skipped and reported; they
        never abort the refresh.

        Raises:
            TransportError: If the store is unreachable
            RemoteError: If the store fails or returns something other than a list
        """
        try:
            raw_records = await self.store.list_all()
        except StoreError as e:
            logger.error("Meal log refresh failed", error=str(e))
            raise

        if not isinstance(raw_records, list):
            logger.error("Meal store returned invalid payload", payload_type=type(raw_records).__name__)
            raise RemoteError(200, message="Meal store returned an invalid collection")

        full_set: dict[str, MealRecord] = {}
        rejected: list[RejectedRecord] = []

        for index, raw in enumerate(raw_records):
            try:
                record = MealNormalizer.normalize(raw)
            except ValidationError as e:
                meal_id = _raw_id(raw)
                logger.warning(
                    "Skipping malformed meal record",
                    index=index,
                    meal_id=meal_id,
                    reason=e.message,
                )
                rejected.append(RejectedRecord(index=index, meal_id=meal_id, reason=e.message))
                continue

            if record.id in full_set:
                logger.warning("Duplicate meal id, keeping last", meal_id=record.id)
            full_set[record.id] = record

        self._full_set = full_set
        self.apply_filter_and_sort()

        logger.info(
            "Meal log refreshed",
            total=len(full_set),
            rejected=len(rejected),
            listed=len(self._derived_view),
        )
        return RefreshReport(
            total=len(full_set),
            loaded=len(raw_records) - len(rejected),
            rejected=tuple(rejected),
        )

    async def fetch_one(self, meal_id: str) -> MealRecord:
        """Load one record from the store, e.g. to edit it.

        Does not change local state.

        Raises:
            NotFoundError: If the meal does not exist
            ValidationError: If the stored record is malformed
        """
        raw = await self.store.get_one(meal_id)
        return MealNormalizer.normalize(raw)

    async def remove(self, meal_id: str) -> None:
        """Delete a meal; drop it locally only once the store confirms.

        Raises:
            StoreError: If the delete fails (local state untouched)
        """
        try:
            await self.store.delete(meal_id)
        except StoreError as e:
            logger.error("Meal delete failed", meal_id=meal_id, error=str(e))
            raise

        if self._full_set.pop(meal_id, None) is None:
            logger.info("Deleted meal was not mirrored locally", meal_id=meal_id)
        self.apply_filter_and_sort()
        logger.info("Meal deleted", meal_id=meal_id, total=len(self._full_set))

    async def upsert(self, item: Union[MealDraft, MealRecord]) -> MealRecord:
        """Create a draft or update an existing record.

        The record returned by the store is normalized and mirrored
        locally only after the store confirms the write.

        Args:
            item: MealDraft to create, or MealRecord to update

        Returns:
            Canonical record as stored

        Raises:
            StoreError: If the write fails (local state untouched)
            ValidationError: If the store's response is malformed
        """
        payload = MealNormalizer.to_payload(item)
        meal_id = item.id if isinstance(item, MealRecord) else None

        try:
            if meal_id is None:
                raw = await self.store.create(payload)
            else:
                raw = await self.store.update(meal_id, payload)
        except StoreError as e:
            logger.error("Meal write failed", meal_id=meal_id, error=str(e))
            raise

        try:
            record = MealNormalizer.normalize(raw)
        except ValidationError as e:
            logger.error("Store returned malformed meal", meal_id=meal_id, reason=e.message)
            raise

        if meal_id is not None and record.id != meal_id:
            logger.warning("Store changed meal id on update", meal_id=meal_id, new_id=record.id)
            self._full_set.pop(meal_id, None)
        self._full_set[record.id] = record
        self.apply_filter_and_sort()
        logger.info(
            "Meal saved",
            meal_id=record.id,
            created=meal_id is None,
            total=len(self._full_set),
        )
        return record


def _raw_id(raw: Any) -> Optional[str]:
    if isinstance(raw, Mapping):
        value = raw.get("id")
        if value is not None and not isinstance(value, bool):
            return str(value)
    return None


__all__ = [
    "RejectedRecord",
    "RefreshReport",
    "MealLogView",
]
