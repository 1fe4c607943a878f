"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict

import httpx
from fastapi import Depends, FastAPI, Header, HTTPException, Request, status

from medianode.api.models import (
    ProfileUpdateRequest,
    ResetPasswordRequest,
    SignInRequest,
    SignUpRequest,
    StoryRequestBody,
)
from medianode.app_logging import configure_logging
from medianode.containers import AppContainer
from medianode.domain.models import AuthResult, Session
from medianode.domain.stories import StoryRequest
from medianode.services.stories import SceneLimitError


async def optional_caller(
    request: Request, authorization: str | None = Header(default=None)
) -> Session | None:
    """Resolve the caller from the request's bearer token, if any."""
    container: AppContainer = request.app.state.container
    return container.authenticator.authenticate(authorization)


async def require_caller(
    caller: Session | None = Depends(optional_caller),
) -> Session:
    """Reject requests without a valid bearer token."""
    if caller is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return caller


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.container.auth_context.start()
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/auth/session")
    async def auth_session(
        caller: Session | None = Depends(optional_caller),
    ) -> dict[str, object]:
        """Return the user the bearer token belongs to."""
        return {"user": asdict(caller.user) if caller else None}

    @app.post("/auth/sign-up")
    async def sign_up(body: SignUpRequest, request: Request) -> dict[str, object]:
        """Register a new account."""
        state_container: AppContainer = request.app.state.container
        result = state_container.auth_context.sign_up(
            body.email, body.password, body.metadata()
        )
        return _result_payload(result)

    @app.post("/auth/sign-in")
    async def sign_in(body: SignInRequest, request: Request) -> dict[str, object]:
        """Sign in with email and password."""
        state_container: AppContainer = request.app.state.container
        result = state_container.auth_context.sign_in(body.email, body.password)
        return _result_payload(result)

    @app.post("/auth/sign-out")
    async def sign_out(
        request: Request, caller: Session = Depends(require_caller)
    ) -> dict[str, object]:
        """Revoke the caller's session."""
        state_container: AppContainer = request.app.state.container
        return _result_payload(
            state_container.auth_context.sign_out(caller.access_token)
        )

    @app.post("/auth/reset-password")
    async def reset_password(
        body: ResetPasswordRequest, request: Request
    ) -> dict[str, object]:
        """Send a password reset email."""
        state_container: AppContainer = request.app.state.container
        return _result_payload(state_container.auth_context.reset_password(body.email))

    @app.get("/limits")
    async def limits(
        request: Request, caller: Session = Depends(require_caller)
    ) -> dict[str, object]:
        """Return scene limits for the caller's plan."""
        state_container: AppContainer = request.app.state.container
        resolved = state_container.limits_service.resolve_limits(caller.identity_id)
        return asdict(resolved)

    @app.patch("/profile")
    async def update_profile(
        body: ProfileUpdateRequest,
        request: Request,
        caller: Session = Depends(require_caller),
    ) -> dict[str, object]:
        """Update the caller's profile."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.profile_service.update_profile(
            caller.identity_id,
            display_name=body.display_name,
            company=body.company,
        )
        if profile is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return asdict(profile)

    @app.post("/stories")
    async def create_story(
        body: StoryRequestBody,
        request: Request,
        caller: Session = Depends(require_caller),
    ) -> dict[str, object]:
        """Submit a story for refinement on the caller's behalf."""
        state_container: AppContainer = request.app.state.container
        story = StoryRequest(**body.model_dump())
        try:
            return await state_container.story_service.submit(
                caller.identity_id, caller.access_token, story
            )
        except SceneLimitError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        except httpx.HTTPError as exc:
            logger.exception(
                "Error refining story", extra={"identity_id": caller.identity_id}
            )
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY) from exc

    @app.get("/notices")
    async def notices(request: Request) -> dict[str, object]:
        """Return and clear pending user notices."""
        state_container: AppContainer = request.app.state.container
        return {
            "notices": [asdict(notice) for notice in state_container.notice_board.drain()]
        }

    return app


def _result_payload(result: AuthResult) -> dict[str, object]:
    return {
        "error": result.error,
        "access_token": result.session.access_token if result.session else None,
    }
