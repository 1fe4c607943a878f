"""Supabase-backed subscription plan repository."""

from dataclasses import dataclass

from supabase import Client

from medianode.domain.models import SubscriptionPlan
from medianode.services.limits import PlanRepository


@dataclass
class SupabasePlanRepository(PlanRepository):
    """Supabase implementation for plan lookups."""

    client: Client

    def get_plan(self, plan_id: str) -> SubscriptionPlan | None:
        """Return the plan for an id, if present."""
        response = (
            self.client.table("subscription_plans")
            .select("id, name, max_scene_count")
            .eq("id", plan_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return SubscriptionPlan(
            id=str(row["id"]),
            name=str(row["name"]),
            max_scene_count=int(row["max_scene_count"]),
        )
