"""Text-to-speech for affirmations."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

import click

from core.models import VisionBoard

logger = logging.getLogger(__name__)

DEFAULT_VOICE = "en-US"


class Speaker(Protocol):
    def speak(self, text: str) -> None:
        ...

    def stop(self) -> None:
        ...


class ConsoleSpeaker:
    """Speaks by echoing to the terminal. Starting new speech stops the old one."""

    def __init__(self, voice: str = DEFAULT_VOICE):
        self.voice = voice
        self.current: Optional[str] = None

    def speak(self, text: str) -> None:
        self.stop()
        self.current = text
        click.echo(f"🔊 [{self.voice}] {text}")

    def stop(self) -> None:
        self.current = None


class RecordingSpeaker:
    """Keeps every utterance in memory; useful headless."""

    def __init__(self) -> None:
        self.spoken: list[str] = []
        self.stops = 0

    def speak(self, text: str) -> None:
        self.stop()
        self.spoken.append(text)

    def stop(self) -> None:
        self.stops += 1


def speak_affirmation(speaker: Speaker, board: VisionBoard, index: int = 0) -> Optional[str]:
    """Speak the board's affirmation at a rotating index. Returns the text spoken."""
    text = board.affirmation_at(index)
    if text is None:
        logger.info(f"Board {board.id} has no affirmations to speak")
        return None
    speaker.speak(text)
    return text
