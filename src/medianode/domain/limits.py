"""Domain models for plan-derived limits."""

from dataclasses import dataclass

MIN_SCENES = 2
FALLBACK_MAX_SCENES = 10
FALLBACK_SUGGESTED_SCENES = 5


@dataclass(frozen=True)
class SceneLimits:
    """Scene count bounds for a user's plan."""

    max_scenes: int
    suggested_scenes: int
    plan_name: str | None = None


FALLBACK_LIMITS = SceneLimits(
    max_scenes=FALLBACK_MAX_SCENES,
    suggested_scenes=FALLBACK_SUGGESTED_SCENES,
    plan_name=None,
)
