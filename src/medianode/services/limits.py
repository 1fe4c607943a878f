"""Plan-derived scene limits."""

import logging
from dataclasses import dataclass
from typing import Protocol

from medianode.domain.limits import (
    FALLBACK_LIMITS,
    FALLBACK_SUGGESTED_SCENES,
    MIN_SCENES,
    SceneLimits,
)
from medianode.domain.models import DEFAULT_PLAN_ID, SubscriptionPlan
from medianode.services.profiles import ProfileRepository

logger = logging.getLogger(__name__)


class PlanRepository(Protocol):
    """Read interface for subscription plans."""

    def get_plan(self, plan_id: str) -> SubscriptionPlan | None:
        """Return the plan for an id, if present."""


def limits_for_plan(plan: SubscriptionPlan) -> SceneLimits:
    """Compute scene limits for a resolved plan."""
    max_scenes = plan.max_scene_count
    suggested = max(FALLBACK_SUGGESTED_SCENES, max_scenes // 2)
    return SceneLimits(
        max_scenes=max_scenes,
        suggested_scenes=min(suggested, max_scenes),
        plan_name=plan.name,
    )


def clamp_scene_count(value: int, limits: SceneLimits) -> int:
    """Keep a user-chosen scene count within [2, max_scenes]."""
    return max(MIN_SCENES, min(value, limits.max_scenes))


@dataclass
class PlanLimitsService:
    """Resolves scene limits from an identity's subscription plan."""

    profile_repository: ProfileRepository
    plan_repository: PlanRepository

    def resolve_limits(self, identity_id: str) -> SceneLimits:
        """Return the identity's scene limits, falling back to defaults."""
        try:
            profile = self.profile_repository.get_profile(identity_id)
        except Exception:
            logger.exception(
                "Error fetching user profile", extra={"identity_id": identity_id}
            )
            return FALLBACK_LIMITS
        if not profile:
            return FALLBACK_LIMITS

        plan_id = profile.subscription_plan_id or DEFAULT_PLAN_ID
        try:
            plan = self.plan_repository.get_plan(plan_id)
        except Exception:
            logger.exception("Error fetching user plan", extra={"plan_id": plan_id})
            return FALLBACK_LIMITS
        if not plan:
            return FALLBACK_LIMITS
        return limits_for_plan(plan)
