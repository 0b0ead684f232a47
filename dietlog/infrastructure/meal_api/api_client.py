"""
Meal store REST API client.

Handles HTTP requests to the meal store (`/meals`, `/meals/{id}`).
Read requests are retried on transport failures; writes are sent once.
"""

import asyncio
import json
from typing import Any, Optional

import aiohttp
import structlog

from dietlog.domain.shared.errors import (
    NotFoundError,
    RemoteError,
    TransportError,
)

logger = structlog.get_logger(__name__)


class MealApiClient:
    """Meal store API client implementing IMealStore."""

    HEADERS = {
        "Accept": "application/json",
        "Content-Type": "application/json",
    }

    def __init__(
        self,
        base_url: str,
        timeout_seconds: int = 10,
        max_retries: int = 3,
    ) -> None:
        """Initialize API client.

        Args:
            base_url: Store base URL, without trailing slash
            timeout_seconds: Request timeout
            max_retries: Max attempts for read requests
        """
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.max_retries = max(1, max_retries)
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> "MealApiClient":
        """Async context manager entry."""
        self._session = aiohttp.ClientSession(headers=self.HEADERS)
        return self

    async def __aexit__(self, *args: object) -> None:
        """Async context manager exit."""
        if self._session:
            await self._session.close()
            self._session = None

    async def list_all(self) -> Any:
        """Get all meals.

        Returns:
            Decoded response body (a list of raw meal records)

        Raises:
            TransportError: If the store is unreachable or times out
            RemoteError: If the store answers with an error status

        Example:
            >>> async def test():
            ...     async with MealApiClient("https://api.example.com") as client:
            ...         return await client.list_all()
        """
        return await self._request("GET", "/meals", retry=True)

    async def get_one(self, meal_id: str) -> Any:
        """Get a single meal by id.

        Raises:
            NotFoundError: If the meal does not exist
            TransportError: If the store is unreachable or times out
            RemoteError: If the store answers with an error status
        """
        return await self._request("GET", f"/meals/{meal_id}", meal_id=meal_id, retry=True)

    async def create(self, fields: dict[str, Any]) -> Any:
        """Create a meal entry (POST)."""
        logger.debug("Creating meal", fields=fields)
        return await self._request("POST", "/meals", body=fields)

    async def update(self, meal_id: str, fields: dict[str, Any]) -> Any:
        """Update an existing meal entry (PUT)."""
        return await self._request("PUT", f"/meals/{meal_id}", body=fields, meal_id=meal_id)

    async def delete(self, meal_id: str) -> Any:
        """Delete a meal entry.

        Returns:
            Deletion confirmation (empty dict when the store sends no body)
        """
        return await self._request("DELETE", f"/meals/{meal_id}", meal_id=meal_id)

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[dict[str, Any]] = None,
        meal_id: Optional[str] = None,
        retry: bool = False,
    ) -> Any:
        url = f"{self.base_url}{path}"
        attempts = self.max_retries if retry else 1

        for attempt in range(attempts):
            try:
                if not self._session:
                    msg = "Client not initialized, use async with"
                    raise TransportError(msg)

                async with self._session.request(
                    method,
                    url,
                    json=body,
                    timeout=aiohttp.ClientTimeout(total=self.timeout_seconds),
                ) as response:
                    text = await response.text()

                    if response.status == 404 and meal_id is not None:
                        logger.info("Meal not found", meal_id=meal_id, method=method)
                        raise NotFoundError(meal_id, body=text)

                    if response.status >= 400:
                        logger.error(
                            "Meal API error response",
                            method=method,
                            url=url,
                            status=response.status,
                            body=text,
                        )
                        raise RemoteError(response.status, body=text)

                    return _decode(text, response.status)

            except asyncio.TimeoutError as e:
                if attempt == attempts - 1:
                    msg = f"Meal API timeout after {self.timeout_seconds}s"
                    raise TransportError(msg) from e

                wait = 2**attempt
                logger.warning(
                    f"Timeout, retrying in {wait}s",
                    method=method,
                    url=url,
                    attempt=attempt + 1,
                )
                await asyncio.sleep(wait)

            except aiohttp.ClientError as e:
                if attempt == attempts - 1:
                    msg = f"Meal API client error: {e}"
                    raise TransportError(msg) from e

                wait = 2**attempt
                logger.warning(
                    f"Client error, retrying in {wait}s",
                    method=method,
                    url=url,
                    attempt=attempt + 1,
                    error=str(e),
                )
                await asyncio.sleep(wait)

        # Should not reach here
        msg = "Max retries exceeded"
        raise TransportError(msg)


def _decode(text: str, status: int) -> Any:
    if not text.strip():
        return {}
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise RemoteError(status, body=text, message="Meal API returned invalid JSON") from e
