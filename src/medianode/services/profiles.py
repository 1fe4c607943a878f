"""Profile provisioning and maintenance."""

import logging
from dataclasses import dataclass
from typing import Protocol

from medianode.domain.models import DEFAULT_PLAN_ID, Profile

logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for profiles."""

    def get_profile(self, identity_id: str) -> Profile | None:
        """Return the profile for an identity, if present."""

    def create_profile(self, profile: Profile) -> Profile | None:
        """Create a profile unless one already exists for its id."""

    def update_profile(
        self, identity_id: str, changes: dict[str, object]
    ) -> Profile | None:
        """Apply changes to a profile and return it."""


@dataclass
class ProfileService:
    """Keeps exactly one profile per signed-in identity."""

    repository: ProfileRepository
    create_on_lookup_error: bool = False

    def reconcile(
        self,
        identity_id: str,
        email: str,
        display_name: str | None = None,
        company: str | None = None,
    ) -> None:
        """Create the identity's profile if it does not exist yet.

        A failed lookup skips creation unless ``create_on_lookup_error`` is set.
        Creation relies on the repository's create-or-ignore semantics, so
        concurrent reconciles for the same identity leave a single profile.
        """
        try:
            existing = self.repository.get_profile(identity_id)
        except Exception:
            logger.exception(
                "Profile lookup failed", extra={"identity_id": identity_id}
            )
            if not self.create_on_lookup_error:
                return
            existing = None

        if existing:
            return

        try:
            self.repository.create_profile(
                Profile(
                    id=identity_id,
                    email=email,
                    display_name=display_name,
                    company=company,
                    subscription_plan_id=DEFAULT_PLAN_ID,
                )
            )
        except Exception:
            logger.exception(
                "Profile creation failed", extra={"identity_id": identity_id}
            )
            return
        logger.info("Provisioned profile", extra={"identity_id": identity_id})

    def update_profile(
        self,
        identity_id: str,
        display_name: str | None = None,
        company: str | None = None,
    ) -> Profile | None:
        """Update editable profile fields, returning the stored profile."""
        changes: dict[str, object] = {}
        if display_name is not None:
            changes["display_name"] = display_name
        if company is not None:
            changes["company"] = company
        if not changes:
            return self.repository.get_profile(identity_id)
        return self.repository.update_profile(identity_id, changes)
