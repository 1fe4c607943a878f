"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from medianode.config import Settings
from medianode.containers import AppContainer
from medianode.domain.models import (
    AuthEvent,
    AuthResult,
    AuthUser,
    Profile,
    Session,
    SubscriptionPlan,
)
from medianode.services.auth import (
    AuthClient,
    AuthContext,
    AuthStateHandler,
    AuthSubscription,
    RequestAuthenticator,
)
from medianode.services.limits import PlanLimitsService, PlanRepository
from medianode.services.notices import NoticeBoard
from medianode.services.profiles import ProfileRepository, ProfileService
from medianode.services.stories import StoryService


def make_session(
    identity_id: str = "user-1",
    email: str = "ada@example.com",
    metadata: dict[str, object] | None = None,
) -> Session:
    return Session(
        user=AuthUser(id=identity_id, email=email, metadata=metadata or {}),
        access_token=f"token-{identity_id}",
    )


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository with create-or-ignore semantics."""

    profiles: dict[str, Profile] = field(default_factory=dict)
    create_calls: list[Profile] = field(default_factory=list)
    fail_lookup: bool = False
    fail_create: bool = False

    def get_profile(self, identity_id: str) -> Profile | None:
        if self.fail_lookup:
            raise RuntimeError("profile lookup failed")
        return self.profiles.get(identity_id)

    def create_profile(self, profile: Profile) -> Profile | None:
        self.create_calls.append(profile)
        if self.fail_create:
            raise RuntimeError("profile insert failed")
        if profile.id in self.profiles:
            return None
        self.profiles[profile.id] = profile
        return profile

    def update_profile(
        self, identity_id: str, changes: dict[str, object]
    ) -> Profile | None:
        current = self.profiles.get(identity_id)
        if current is None:
            return None
        updated = Profile(
            id=current.id,
            email=current.email,
            display_name=changes.get("display_name", current.display_name),
            company=changes.get("company", current.company),
            subscription_plan_id=current.subscription_plan_id,
        )
        self.profiles[identity_id] = updated
        return updated


@dataclass
class InMemoryPlanRepository(PlanRepository):
    """In-memory subscription plan repository."""

    plans: dict[str, SubscriptionPlan] = field(default_factory=dict)
    requested: list[str] = field(default_factory=list)
    fail_lookup: bool = False

    def get_plan(self, plan_id: str) -> SubscriptionPlan | None:
        self.requested.append(plan_id)
        if self.fail_lookup:
            raise RuntimeError("plan lookup failed")
        return self.plans.get(plan_id)


@dataclass
class FakeSubscription(AuthSubscription):
    """Subscription handle that counts unsubscribe calls."""

    unsubscribe_calls: int = 0

    def unsubscribe(self) -> None:
        self.unsubscribe_calls += 1


@dataclass
class FakeAuthClient(AuthClient):
    """Fake auth client that lets tests emit auth-state events."""

    session: Session | None = None
    fail_get_session: bool = False
    error: str | None = None
    sign_in_session: Session | None = None
    tokens: dict[str, AuthUser] = field(default_factory=dict)
    handlers: list[AuthStateHandler] = field(default_factory=list)
    subscriptions: list[FakeSubscription] = field(default_factory=list)
    calls: list[tuple[str, tuple[object, ...]]] = field(default_factory=list)

    def get_session(self) -> Session | None:
        if self.fail_get_session:
            raise RuntimeError("network down")
        return self.session

    def get_user(self, access_token: str) -> AuthUser | None:
        return self.tokens.get(access_token)

    def issue(self, session: Session) -> Session:
        """Make the session's access token verifiable and return the session."""
        self.tokens[session.access_token] = session.user
        return session

    def on_auth_state_change(self, handler: AuthStateHandler) -> AuthSubscription:
        self.handlers.append(handler)
        subscription = FakeSubscription()
        self.subscriptions.append(subscription)
        return subscription

    def emit(self, event: AuthEvent, session: Session | None) -> None:
        for handler in self.handlers:
            handler(event, session)

    def sign_up(
        self, email: str, password: str, metadata: dict[str, object] | None = None
    ) -> AuthResult:
        self.calls.append(("sign_up", (email, password, metadata)))
        return AuthResult(error=self.error)

    def sign_in_with_password(self, email: str, password: str) -> AuthResult:
        self.calls.append(("sign_in_with_password", (email, password)))
        if self.error:
            return AuthResult(error=self.error)
        return AuthResult(session=self.sign_in_session)

    def sign_out(self, access_token: str | None = None) -> AuthResult:
        self.calls.append(("sign_out", (access_token,)))
        return AuthResult(error=self.error)

    def reset_password_for_email(self, email: str, redirect_to: str) -> AuthResult:
        self.calls.append(("reset_password_for_email", (email, redirect_to)))
        return AuthResult(error=self.error)


@dataclass
class FakeStoryClient:
    """Fake story client recording submissions."""

    response: dict[str, object] = field(
        default_factory=lambda: {"scenes": [{"text": "Opening shot"}]}
    )
    calls: list[tuple[str, dict[str, object]]] = field(default_factory=list)

    async def refine_story(
        self, access_token: str, payload: dict[str, object]
    ) -> dict[str, object]:
        self.calls.append((access_token, payload))
        return self.response


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_anon_key="header.payload.signature",
        supabase_service_role_key=None,
        site_url="https://medianode.ai",
        story_api_url="https://stories.example.com",
    )


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def plan_repository() -> InMemoryPlanRepository:
    return InMemoryPlanRepository(
        plans={
            "free": SubscriptionPlan(id="free", name="Free", max_scene_count=10),
            "pro": SubscriptionPlan(id="pro", name="Pro", max_scene_count=20),
        }
    )


@pytest.fixture
def auth_client() -> FakeAuthClient:
    return FakeAuthClient()


@pytest.fixture
def notice_board() -> NoticeBoard:
    return NoticeBoard()


@pytest.fixture
def story_client() -> FakeStoryClient:
    return FakeStoryClient()


@pytest.fixture
def auth_context(
    auth_client: FakeAuthClient,
    profile_repository: InMemoryProfileRepository,
    notice_board: NoticeBoard,
) -> AuthContext:
    return AuthContext(
        auth_client=auth_client,
        profile_service=ProfileService(profile_repository),
        notifier=notice_board,
        site_url="https://medianode.ai",
    )


@pytest.fixture
def container(
    settings: Settings,
    profile_repository: InMemoryProfileRepository,
    plan_repository: InMemoryPlanRepository,
    auth_client: FakeAuthClient,
    notice_board: NoticeBoard,
    story_client: FakeStoryClient,
) -> AppContainer:
    profile_service = ProfileService(profile_repository)
    limits_service = PlanLimitsService(
        profile_repository=profile_repository,
        plan_repository=plan_repository,
    )
    auth_context = AuthContext(
        auth_client=auth_client,
        profile_service=profile_service,
        notifier=notice_board,
        site_url=settings.site_url,
    )
    story_service = StoryService(
        story_client=story_client,
        limits_service=limits_service,
    )

    async def close_resources() -> None:
        auth_context.close()

    return AppContainer(
        settings=settings,
        notice_board=notice_board,
        profile_service=profile_service,
        limits_service=limits_service,
        auth_context=auth_context,
        authenticator=RequestAuthenticator(auth_client),
        story_service=story_service,
        close_resources=close_resources,
    )
