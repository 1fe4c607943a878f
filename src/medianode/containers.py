"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from medianode.adapters.story_client import HttpxStoryClient
from medianode.adapters.supabase_auth_client import SupabaseAuthClient
from medianode.adapters.supabase_plan_repository import SupabasePlanRepository
from medianode.adapters.supabase_profile_repository import SupabaseProfileRepository
from medianode.config import Settings, supabase_key
from medianode.services.auth import AuthContext, RequestAuthenticator
from medianode.services.limits import PlanLimitsService
from medianode.services.notices import NoticeBoard
from medianode.services.profiles import ProfileService
from medianode.services.stories import StoryService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    notice_board: NoticeBoard
    profile_service: ProfileService
    limits_service: PlanLimitsService
    auth_context: AuthContext
    authenticator: RequestAuthenticator
    story_service: StoryService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, supabase_key(resolved_settings)
    )
    profile_repository = SupabaseProfileRepository(supabase_client)
    plan_repository = SupabasePlanRepository(supabase_client)
    notice_board = NoticeBoard()
    profile_service = ProfileService(
        repository=profile_repository,
        create_on_lookup_error=resolved_settings.create_profile_on_lookup_error,
    )
    limits_service = PlanLimitsService(
        profile_repository=profile_repository,
        plan_repository=plan_repository,
    )
    auth_client = SupabaseAuthClient(supabase_client)
    auth_context = AuthContext(
        auth_client=auth_client,
        profile_service=profile_service,
        notifier=notice_board,
        site_url=resolved_settings.site_url,
    )
    story_client = HttpxStoryClient.create(resolved_settings.story_api_url)
    story_service = StoryService(
        story_client=story_client,
        limits_service=limits_service,
    )

    async def close_resources() -> None:
        auth_context.close()
        await story_client.close()

    return AppContainer(
        settings=resolved_settings,
        notice_board=notice_board,
        profile_service=profile_service,
        limits_service=limits_service,
        auth_context=auth_context,
        authenticator=RequestAuthenticator(auth_client),
        story_service=story_service,
        close_resources=close_resources,
    )
