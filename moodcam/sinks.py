"""
Presentation sinks: the two write-only display slots the loop publishes into.
"""
from __future__ import annotations
import logging
from typing import Optional, Protocol

from moodcam.models import MoodView

logger = logging.getLogger(__name__)


class PresentationSink(Protocol):
    def show_status(self, text: Optional[str]) -> None:
        """Write the status slot; None hides it."""
        ...

    def show_mood(self, text: str) -> None:
        """Overwrite the mood slot."""
        ...


class MemorySink:
    """Keeps the latest slot values in memory (served by the API)."""
    def __init__(self):
        self.status: Optional[str] = None
        self.mood: Optional[str] = None
        self.mood_writes = 0

    def show_status(self, text: Optional[str]) -> None:
        self.status = text

    def show_mood(self, text: str) -> None:
        self.mood = text
        self.mood_writes += 1

    def view(self) -> MoodView:
        return MoodView(status=self.status, mood=self.mood)


class ConsoleSink:
    """Prints mood changes to stdout; status goes to the log."""
    def __init__(self):
        self._last_mood: Optional[str] = None

    def show_status(self, text: Optional[str]) -> None:
        if text:
            logger.info(f"[status] {text}")

    def show_mood(self, text: str) -> None:
        if text != self._last_mood:
            print(f"Mood: {text}", flush=True)
            self._last_mood = text
