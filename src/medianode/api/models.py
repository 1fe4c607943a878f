"""Pydantic models for dashboard API payloads."""

from pydantic import BaseModel, Field


class SignInRequest(BaseModel):
    """Email and password credentials."""

    email: str
    password: str


class SignUpRequest(SignInRequest):
    """Sign-up credentials with optional profile metadata."""

    name: str | None = None
    company: str | None = None

    def metadata(self) -> dict[str, object]:
        return {
            key: value
            for key, value in {"name": self.name, "company": self.company}.items()
            if value is not None
        }


class ResetPasswordRequest(BaseModel):
    """Password reset request."""

    email: str


class ProfileUpdateRequest(BaseModel):
    """Editable profile fields."""

    display_name: str | None = None
    company: str | None = None


class StoryRequestBody(BaseModel):
    """Story-creation form submission."""

    story_content: str = Field(min_length=1)
    scene_limit: int
    emotion: str = ""
    duration: int = 60
    language: str = "english"
    voice_style: str = "Friendly"
    add_hook: bool = True
    is_manual_input: bool = False
