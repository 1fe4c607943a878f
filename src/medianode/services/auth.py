"""Session store driven by the backend's auth-state stream."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from types import TracebackType
from typing import Protocol

from medianode.domain.models import AuthEvent, AuthResult, AuthUser, Notice, Session
from medianode.services.notices import Notifier
from medianode.services.profiles import ProfileService

logger = logging.getLogger(__name__)

AuthStateHandler = Callable[[AuthEvent, Session | None], None]


class AuthSubscription(Protocol):
    """Handle for an auth-state listener."""

    def unsubscribe(self) -> None:
        """Stop receiving notifications."""


class AuthClient(Protocol):
    """Interface for the backend's authentication service."""

    def get_session(self) -> Session | None:
        """Return the persisted session, if any."""

    def get_user(self, access_token: str) -> AuthUser | None:
        """Verify an access token and return its identity, if valid."""

    def on_auth_state_change(self, handler: AuthStateHandler) -> AuthSubscription:
        """Register a handler for auth-state notifications."""

    def sign_up(
        self, email: str, password: str, metadata: dict[str, object] | None = None
    ) -> AuthResult:
        """Register a new identity."""

    def sign_in_with_password(self, email: str, password: str) -> AuthResult:
        """Sign in with email and password."""

    def sign_out(self, access_token: str | None = None) -> AuthResult:
        """Sign out the given session, or the current one."""

    def reset_password_for_email(self, email: str, redirect_to: str) -> AuthResult:
        """Send a password reset email."""


@dataclass
class AuthContext:
    """Holds the current session and reacts to auth-state changes.

    Construct once per application, call ``start`` to bootstrap and subscribe,
    and ``close`` (or leave the ``with`` block) to release the listener.
    """

    auth_client: AuthClient
    profile_service: ProfileService
    notifier: Notifier
    site_url: str
    loading: bool = True
    _session: Session | None = field(default=None, init=False)
    _subscription: AuthSubscription | None = field(default=None, init=False)

    def start(self) -> None:
        """Load the existing session and subscribe to auth-state changes."""
        if self._subscription is not None:
            return
        try:
            self._session = self.auth_client.get_session()
        except Exception:
            logger.exception("Failed to load initial session")
            self._session = None
        self.loading = False
        self._subscription = self.auth_client.on_auth_state_change(
            self._handle_auth_change
        )

    def close(self) -> None:
        """Release the auth-state subscription."""
        subscription, self._subscription = self._subscription, None
        if subscription is not None:
            subscription.unsubscribe()

    def __enter__(self) -> "AuthContext":
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def current_session(self) -> Session | None:
        return self._session

    def current_user(self) -> AuthUser | None:
        return self._session.user if self._session else None

    def sign_up(
        self, email: str, password: str, metadata: dict[str, object] | None = None
    ) -> AuthResult:
        """Register a new account."""
        result = self.auth_client.sign_up(email, password, metadata)
        self._notify_failure("Sign up failed", result)
        return result

    def sign_in(self, email: str, password: str) -> AuthResult:
        """Sign in with email and password."""
        result = self.auth_client.sign_in_with_password(email, password)
        self._notify_failure("Sign in failed", result)
        return result

    def sign_out(self, access_token: str | None = None) -> AuthResult:
        """Sign out the given session, or the current user."""
        result = self.auth_client.sign_out(access_token)
        self._notify_failure("Sign out failed", result)
        return result

    def reset_password(self, email: str) -> AuthResult:
        """Send a password reset link pointing back to the site."""
        redirect_to = f"{self.site_url.rstrip('/')}/reset-password"
        result = self.auth_client.reset_password_for_email(email, redirect_to)
        self._notify_failure("Password reset failed", result)
        return result

    def _handle_auth_change(self, event: AuthEvent, session: Session | None) -> None:
        self._session = session
        self.loading = False

        if event is AuthEvent.SIGNED_IN and session is not None:
            user = session.user
            self.profile_service.reconcile(
                identity_id=user.id,
                email=user.email or "",
                display_name=_metadata_str(user.metadata, "name"),
                company=_metadata_str(user.metadata, "company"),
            )
            self.notifier.notify(
                Notice(
                    title="Welcome back!",
                    description="You have successfully signed in.",
                )
            )
        elif event is AuthEvent.SIGNED_OUT:
            self.notifier.notify(
                Notice(
                    title="Signed out",
                    description="You have been signed out successfully.",
                )
            )

    def _notify_failure(self, title: str, result: AuthResult) -> None:
        if result.error is None:
            return
        self.notifier.notify(
            Notice(title=title, description=result.error, variant="destructive")
        )


def _metadata_str(metadata: dict[str, object], key: str) -> str | None:
    value = metadata.get(key)
    return str(value) if value is not None else None


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer`` header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


@dataclass
class RequestAuthenticator:
    """Resolves the calling identity from a bearer token on each request."""

    auth_client: AuthClient

    def authenticate(self, authorization: str | None) -> Session | None:
        """Return the caller's session, or None for a missing or bad token."""
        token = bearer_token(authorization)
        if token is None:
            return None
        try:
            user = self.auth_client.get_user(token)
        except Exception:
            logger.exception("Failed to verify access token")
            return None
        if user is None:
            return None
        return Session(user=user, access_token=token)
