# physiotrack/services/announcements.py
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional, Protocol

if TYPE_CHECKING:
    from physiotrack.services.session_controller import Exercise, Session

log = logging.getLogger(__name__)


class AnnouncementEvent(str, Enum):
    START = "start"
    EXERCISE_COMPLETE = "exercise_complete"
    SESSION_COMPLETE = "session_complete"
    CANCEL = "cancel"


class Announcer(Protocol):
    def announce(self, event: AnnouncementEvent, session: "Session", **context) -> None: ...


class NullAnnouncer:
    def announce(self, event, session, **context) -> None:
        return None


@dataclass(slots=True)
class VoiceSettings:
    enabled: bool = True
    announce_start: bool = True
    announce_complete: bool = True


def session_label(session: "Session") -> str:
    return session.template_name or "your"


InstructionLookup = Callable[[str], str]


def compose_message(event: AnnouncementEvent, session: "Session",
                    exercise: Optional["Exercise"] = None,
                    next_exercise: Optional["Exercise"] = None,
                    instructions: Optional[InstructionLookup] = None) -> str:
    """Text spoken for ``event``. ``instructions`` maps an exercise name to how-to text."""
    def how_to(e: "Exercise") -> str:
        return f" {instructions(e.name)}" if instructions else ""

    if event is AnnouncementEvent.START:
        text = (f"Welcome to {session_label(session)} session. "
                f"{len(session.exercises)} exercises are waiting for you.")
        if exercise is not None:
            text += f" Now starting {exercise.name}.{how_to(exercise)} Begin when you are ready."
        return text
    if event is AnnouncementEvent.EXERCISE_COMPLETE:
        text = f"Great! You completed {exercise.name}." if exercise else "Exercise completed."
        if next_exercise is not None:
            return text + f" Next exercise: {next_exercise.name}.{how_to(next_exercise)} Continue when you are ready."
        return text + " All exercises are done! Finish the session to collect your points."
    if event is AnnouncementEvent.SESSION_COMPLETE:
        return (f"Congratulations! You completed {session_label(session)} session. "
                f"You finished {len(session.exercises)} exercises and earned {session.points_earned} points.")
    return "Session cancelled."


class LoggingAnnouncer:
    """Writes the text that would be spoken to the log and keeps the latest ones."""

    def __init__(self, settings: Optional[VoiceSettings] = None, *, keep: int = 20,
                 instructions: Optional[InstructionLookup] = None):
        self.settings = settings or VoiceSettings()
        self.instructions = instructions
        self.recent: deque[str] = deque(maxlen=keep)

    def _muted(self, event: AnnouncementEvent) -> bool:
        if not self.settings.enabled:
            return True
        if event is AnnouncementEvent.START:
            return not self.settings.announce_start
        if event in (AnnouncementEvent.EXERCISE_COMPLETE, AnnouncementEvent.SESSION_COMPLETE):
            return not self.settings.announce_complete
        return False

    def announce(self, event: AnnouncementEvent, session: "Session", **context) -> None:
        if self._muted(event):
            return
        text = compose_message(event, session, context.get("exercise"), context.get("next_exercise"),
                               self.instructions)
        self.recent.append(text)
        log.info("announce[%s] %s", event.value, text)
