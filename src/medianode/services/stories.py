"""Story submission service."""

import logging
from dataclasses import dataclass

from medianode.adapters.story_client import StoryClient
from medianode.domain.limits import MIN_SCENES
from medianode.domain.stories import StoryRequest
from medianode.services.limits import PlanLimitsService

logger = logging.getLogger(__name__)


class SceneLimitError(ValueError):
    """Raised when a requested scene count is outside the plan's range."""


@dataclass
class StoryService:
    """Validates story requests against plan limits and submits them."""

    story_client: StoryClient
    limits_service: PlanLimitsService

    async def submit(
        self, identity_id: str, access_token: str, request: StoryRequest
    ) -> dict[str, object]:
        """Submit a story for refinement."""
        limits = self.limits_service.resolve_limits(identity_id)
        if not MIN_SCENES <= request.scene_limit <= limits.max_scenes:
            raise SceneLimitError(
                f"Scene limit must be between {MIN_SCENES} and {limits.max_scenes}"
            )
        logger.info(
            "Submitting story",
            extra={"identity_id": identity_id, "scene_limit": request.scene_limit},
        )
        return await self.story_client.refine_story(access_token, request.to_payload())
