"""Speech integration."""

from integrations.speech.speaker import ConsoleSpeaker, RecordingSpeaker, Speaker, speak_affirmation

__all__ = ["ConsoleSpeaker", "RecordingSpeaker", "Speaker", "speak_affirmation"]
