"""TheMealDB API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class MealDbClient(Protocol):
    """Interface for TheMealDB interactions."""

    async def list_ingredients(self) -> dict[str, object]:
        """Return the raw ingredient list."""

    async def filter_by_ingredient(self, ingredient: str) -> dict[str, object]:
        """Return raw meal stubs containing an ingredient."""

    async def lookup_meal(self, meal_id: str) -> dict[str, object]:
        """Return raw full details for a meal id."""


@dataclass
class HttpxMealDbClient(MealDbClient):
    """HTTPX-backed TheMealDB client."""

    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str) -> "HttpxMealDbClient":
        """Create a client with a managed httpx session."""
        return cls(base_url=base_url.rstrip("/"), http_client=httpx.AsyncClient())

    async def list_ingredients(self) -> dict[str, object]:
        """Fetch every ingredient TheMealDB knows about."""
        return await self._get("list.php", {"i": "list"})

    async def filter_by_ingredient(self, ingredient: str) -> dict[str, object]:
        """Fetch meals whose main ingredients include ``ingredient``."""
        return await self._get("filter.php", {"i": ingredient})

    async def lookup_meal(self, meal_id: str) -> dict[str, object]:
        """Fetch full meal details."""
        return await self._get("lookup.php", {"i": meal_id})

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _get(self, path: str, params: dict[str, str]) -> dict[str, object]:
        response = await self.http_client.get(
            f"{self.base_url}/{path}", params=params, timeout=15
        )
        response.raise_for_status()
        return response.json()
