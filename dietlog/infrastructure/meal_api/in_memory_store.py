"""In-memory meal store implementation.

Provides an in-memory implementation of the IMealStore port for tests
and offline demos. Uses a dictionary for storage with no external
dependencies.
"""

from copy import deepcopy
from typing import Any, Dict, Iterable, List, Optional
from uuid import uuid4

from dietlog.domain.shared.errors import NotFoundError


class InMemoryMealStore:
    """
    In-memory implementation of IMealStore port.

    Records are stored in the raw wire shape, exactly as a remote store
    would hold them, so normalization is exercised on the way out.

    Thread safety: NOT thread-safe
    Persistence: Data lost on process restart (in-memory only)

    Example:
        >>> store = InMemoryMealStore()
        >>> created = await store.create({"foodName": "Toast", ...})
        >>> await store.get_one(created["id"])
    """

    def __init__(self, records: Optional[Iterable[Dict[str, Any]]] = None) -> None:
        """Initialize store, optionally seeded with raw records."""
        self._storage: Dict[str, Dict[str, Any]] = {}
        for record in records or ():
            meal_id = str(record.get("id") or uuid4())
            self._storage[meal_id] = {**deepcopy(record), "id": meal_id}

    async def list_all(self) -> List[Dict[str, Any]]:
        """Return deep copies of every stored record, in insertion order."""
        return [deepcopy(record) for record in self._storage.values()]

    async def get_one(self, meal_id: str) -> Dict[str, Any]:
        record = self._storage.get(meal_id)
        if record is None:
            raise NotFoundError(meal_id)
        return deepcopy(record)

    async def create(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        meal_id = str(uuid4())
        self._storage[meal_id] = {**deepcopy(fields), "id": meal_id}
        return deepcopy(self._storage[meal_id])

    async def update(self, meal_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Replace all fields of an existing record (PUT semantics)."""
        if meal_id not in self._storage:
            raise NotFoundError(meal_id)
        self._storage[meal_id] = {**deepcopy(fields), "id": meal_id}
        return deepcopy(self._storage[meal_id])

    async def delete(self, meal_id: str) -> Dict[str, Any]:
        if self._storage.pop(meal_id, None) is None:
            raise NotFoundError(meal_id)
        return {"message": "Meal deleted", "id": meal_id}

    def __len__(self) -> int:
        return len(self._storage)
