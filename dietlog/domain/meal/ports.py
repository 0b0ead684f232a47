"""
Ports (Interfaces) for the meal store.

The view engine consumes the store as an opaque capability; any transport
(HTTP, in-memory) can implement this protocol.

Design Pattern: Ports & Adapters (Hexagonal Architecture)
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IMealStore(Protocol):
    """
    Port for the remote meal store.

    Records are raw mappings with wire field names; normalization is the
    engine's job, not the store's.
    """

    async def list_all(self) -> list[dict[str, Any]]:
        """
        Fetch the full meal collection.

        Raises:
            TransportError: On network failure
            RemoteError: On non-success response
        """
        ...

    async def get_one(self, meal_id: str) -> dict[str, Any]:
        """
        Fetch one meal.

        Raises:
            NotFoundError: If the id has no record
            TransportError: On network failure
            RemoteError: On non-success response
        """
        ...

    async def create(self, fields: dict[str, Any]) -> dict[str, Any]:
        """Create a meal and return the stored record."""
        ...

    async def update(self, meal_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        """Replace a meal's fields and return the stored record."""
        ...

    async def delete(self, meal_id: str) -> dict[str, Any]:
        """Delete a meal and return the store's confirmation."""
        ...
