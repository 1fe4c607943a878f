"""Supabase-backed profile repository."""

from dataclasses import dataclass

from supabase import Client

from medianode.domain.models import DEFAULT_PLAN_ID, Profile
from medianode.services.profiles import ProfileRepository

_PROFILE_COLUMNS = "id, email, display_name, company, subscription_plan_id"


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile persistence."""

    client: Client

    def get_profile(self, identity_id: str) -> Profile | None:
        """Return the profile for an identity, if present."""
        response = (
            self.client.table("profiles")
            .select(_PROFILE_COLUMNS)
            .eq("id", identity_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _row_to_profile(response.data[0])

    def create_profile(self, profile: Profile) -> Profile | None:
        """Insert a profile, ignoring the write if the id already exists."""
        response = (
            self.client.table("profiles")
            .upsert(
                {
                    "id": profile.id,
                    "email": profile.email,
                    "display_name": profile.display_name,
                    "company": profile.company,
                    "subscription_plan_id": profile.subscription_plan_id,
                },
                on_conflict="id",
                ignore_duplicates=True,
            )
            .execute()
        )
        if not response.data:
            return None
        return _row_to_profile(response.data[0])

    def update_profile(
        self, identity_id: str, changes: dict[str, object]
    ) -> Profile | None:
        """Update a profile row and return it."""
        response = (
            self.client.table("profiles").update(changes).eq("id", identity_id).execute()
        )
        if not response.data:
            return None
        return _row_to_profile(response.data[0])


def _row_to_profile(row: dict[str, object]) -> Profile:
    return Profile(
        id=str(row["id"]),
        email=str(row.get("email") or ""),
        display_name=row.get("display_name"),
        company=row.get("company"),
        subscription_plan_id=str(row.get("subscription_plan_id") or DEFAULT_PLAN_ID),
    )
