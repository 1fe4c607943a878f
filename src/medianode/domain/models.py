"""Domain models for sessions, profiles and plans."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

DEFAULT_PLAN_ID = "free"


class AuthEvent(str, Enum):
    """Auth-state change tags emitted by the backend."""

    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    USER_UPDATED = "USER_UPDATED"
    PASSWORD_RECOVERY = "PASSWORD_RECOVERY"
    INITIAL_SESSION = "INITIAL_SESSION"
    OTHER = "OTHER"

    @classmethod
    def parse(cls, raw: str) -> "AuthEvent":
        """Map a raw event tag onto a known event, or OTHER."""
        try:
            return cls(raw)
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class AuthUser:
    """The authenticated identity carried by a session."""

    id: str
    email: str | None
    metadata: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class Session:
    """An authenticated session issued by the backend."""

    user: AuthUser
    access_token: str
    expires_at: datetime | None = None

    @property
    def identity_id(self) -> str:
        return self.user.id


@dataclass(frozen=True)
class Profile:
    """Application-owned record extending an identity."""

    id: str
    email: str
    display_name: str | None = None
    company: str | None = None
    subscription_plan_id: str = DEFAULT_PLAN_ID


@dataclass(frozen=True)
class SubscriptionPlan:
    """Entitlement tier reference data."""

    id: str
    name: str
    max_scene_count: int


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a credential operation."""

    error: str | None = None
    session: Session | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class Notice:
    """A user-visible notification."""

    title: str
    description: str
    variant: str = "default"
