"""Domain models for story submissions."""

from dataclasses import dataclass


@dataclass(frozen=True)
class StoryRequest:
    """A story-creation form submission."""

    story_content: str
    scene_limit: int
    emotion: str = ""
    duration: int = 60
    language: str = "english"
    voice_style: str = "Friendly"
    add_hook: bool = True
    is_manual_input: bool = False

    def to_payload(self) -> dict[str, object]:
        """Return the JSON body expected by the refinement API."""
        return {
            "storyContent": self.story_content,
            "settings": {
                "emotion": self.emotion,
                "duration": self.duration,
                "language": self.language,
                "voiceStyle": self.voice_style,
                "addHook": self.add_hook,
                "isManualInput": self.is_manual_input,
                "userSelectedSceneLimit": self.scene_limit,
            },
        }
