"""Supabase auth adapter."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import AuthError, Client

from medianode.domain.models import AuthEvent, AuthResult, AuthUser, Session
from medianode.services.auth import AuthClient, AuthStateHandler, AuthSubscription


@dataclass
class SupabaseAuthClient(AuthClient):
    """Adapts the Supabase auth API to domain sessions and results."""

    client: Client

    def get_session(self) -> Session | None:
        """Return the persisted session, if any."""
        return _to_session(self.client.auth.get_session())

    def get_user(self, access_token: str) -> AuthUser | None:
        """Verify an access token against the auth server."""
        try:
            response = self.client.auth.get_user(access_token)
        except AuthError:
            return None
        if response is None or response.user is None:
            return None
        return _to_user(response.user)

    def on_auth_state_change(self, handler: AuthStateHandler) -> AuthSubscription:
        """Forward Supabase auth events to the handler as domain values."""

        def callback(event: str, session: object | None) -> None:
            handler(AuthEvent.parse(str(event)), _to_session(session))

        return self.client.auth.on_auth_state_change(callback)

    def sign_up(
        self, email: str, password: str, metadata: dict[str, object] | None = None
    ) -> AuthResult:
        """Register a new identity."""
        try:
            response = self.client.auth.sign_up(
                {
                    "email": email,
                    "password": password,
                    "options": {"data": metadata or {}},
                }
            )
        except AuthError as exc:
            return AuthResult(error=exc.message)
        return AuthResult(session=_to_session(getattr(response, "session", None)))

    def sign_in_with_password(self, email: str, password: str) -> AuthResult:
        """Sign in with email and password."""
        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthError as exc:
            return AuthResult(error=exc.message)
        return AuthResult(session=_to_session(getattr(response, "session", None)))

    def sign_out(self, access_token: str | None = None) -> AuthResult:
        """Revoke the given token's session, or sign out the client session."""
        try:
            if access_token:
                self.client.auth.admin.sign_out(access_token)
            else:
                self.client.auth.sign_out()
        except AuthError as exc:
            return AuthResult(error=exc.message)
        return AuthResult()

    def reset_password_for_email(self, email: str, redirect_to: str) -> AuthResult:
        """Send a password reset email."""
        try:
            self.client.auth.reset_password_for_email(
                email, {"redirect_to": redirect_to}
            )
        except AuthError as exc:
            return AuthResult(error=exc.message)
        return AuthResult()


def _to_user(user: object) -> AuthUser:
    return AuthUser(
        id=str(user.id),
        email=getattr(user, "email", None),
        metadata=dict(getattr(user, "user_metadata", None) or {}),
    )


def _to_session(raw: object | None) -> Session | None:
    """Convert a Supabase session object into a domain session."""
    if raw is None:
        return None
    user = getattr(raw, "user", None)
    if user is None:
        return None
    expires_at = getattr(raw, "expires_at", None)
    return Session(
        user=_to_user(user),
        access_token=str(raw.access_token),
        expires_at=(
            datetime.fromtimestamp(expires_at, tz=UTC) if expires_at else None
        ),
    )
