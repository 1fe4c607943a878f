"""Story refinement API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class StoryClient(Protocol):
    """Interface for the story refinement API."""

    async def refine_story(
        self, access_token: str, payload: dict[str, object]
    ) -> dict[str, object]:
        """Submit a story for refinement and return the API response."""


@dataclass
class HttpxStoryClient(StoryClient):
    """HTTPX-backed story refinement client."""

    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str) -> "HttpxStoryClient":
        """Create a story client with a managed httpx session."""
        return cls(base_url=base_url, http_client=httpx.AsyncClient())

    async def refine_story(
        self, access_token: str, payload: dict[str, object]
    ) -> dict[str, object]:
        """Post a story to the refinement endpoint."""
        response = await self.http_client.post(
            f"{self.base_url.rstrip('/')}/api/refine-story",
            headers={"Authorization": f"Bearer {access_token}"},
            json=payload,
            timeout=60,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
