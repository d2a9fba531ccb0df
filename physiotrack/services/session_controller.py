# physiotrack/services/session_controller.py
"""
Life cycle of a single exercise session.

    Idle -> Active(cursor=0) -> ... -> Active(cursor=n) -> Finalized
    Active(any cursor) -> Idle          (cancel)

One controller per user. Mutations only happen through the methods below;
wrong-state calls are no-ops, except ``start`` which rejects empty selections
and a second concurrent session.
"""
from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Iterable, Optional, Sequence

from physiotrack.services.announcements import Announcer, AnnouncementEvent, NullAnnouncer

log = logging.getLogger(__name__)

SESSION_REWARD = 10


class SessionError(Exception):
    """Base for rejected session transitions."""


class EmptyExerciseSelection(SessionError):
    pass


class SessionAlreadyActive(SessionError):
    pass


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class Exercise:
    name: str
    description: str = ""
    completed: bool = False
    id: str = field(default_factory=_new_id)

    def fresh_copy(self) -> "Exercise":
        return replace(self, id=_new_id(), completed=False)


@dataclass(frozen=True, slots=True)
class SessionTemplate:
    name: str
    exercises: tuple[Exercise, ...]
    id: Optional[int] = None
    created_at: datetime = field(default_factory=_now)


@dataclass(frozen=True, slots=True)
class Session:
    exercises: tuple[Exercise, ...]
    start_date: datetime = field(default_factory=_now)
    end_date: Optional[datetime] = None
    completed: bool = False
    points_earned: int = 0
    cursor: int = 0
    template_id: Optional[int] = None
    template_name: str = ""
    id: str = field(default_factory=_new_id)

    @property
    def current_exercise(self) -> Optional[Exercise]:
        if self.cursor < len(self.exercises):
            return self.exercises[self.cursor]
        return None

    @property
    def completed_count(self) -> int:
        return sum(1 for e in self.exercises if e.completed)


@dataclass(slots=True)
class UserTotals:
    sessions: int = 0
    points: int = 0


class SessionController:
    def __init__(
        self,
        *,
        history: Iterable[Session] = (),
        totals: Optional[UserTotals] = None,
        announcer: Optional[Announcer] = None,
    ):
        self._active: Optional[Session] = None
        self._history: list[Session] = list(history)
        self._totals = totals or UserTotals()
        self.announcer: Announcer = announcer or NullAnnouncer()
        # Requests for one user run on a threadpool; transitions are serialized
        self._lock = threading.Lock()

    # STATE
    @property
    def active_session(self) -> Optional[Session]:
        return self._active

    @property
    def cursor(self) -> int:
        return self._active.cursor if self._active else 0

    @property
    def history(self) -> tuple[Session, ...]:
        return tuple(self._history)

    @property
    def user_totals(self) -> UserTotals:
        return UserTotals(self._totals.sessions, self._totals.points)

    @property
    def current_exercise(self) -> Optional[Exercise]:
        """The next exercise to perform, or None when idle or finished."""
        return self._active.current_exercise if self._active else None

    # QUERIES
    def is_current_exercise_completed(self) -> bool:
        """
        "Current" is the exercise the user just worked on, the one right
        before the cursor. False before the first completion.
        """
        s = self._active
        if s is None or s.cursor == 0:
            return False
        return s.exercises[s.cursor - 1].completed

    def are_all_exercises_completed(self) -> bool:
        return self._active is not None and self._active.cursor >= len(self._active.exercises)

    # TRANSITIONS
    def start(
        self,
        exercises: Sequence[Exercise],
        *,
        template_id: Optional[int] = None,
        template_name: str = "",
    ) -> Session:
        if not exercises:
            raise EmptyExerciseSelection("cannot start a session without exercises")
        with self._lock:
            if self._active is not None:
                raise SessionAlreadyActive("a session is already in progress")
            started = self._active = Session(
                exercises=tuple(e.fresh_copy() for e in exercises),
                template_id=template_id,
                template_name=template_name,
            )
        self._notify(AnnouncementEvent.START, started, exercise=started.exercises[0])
        return started

    def start_from_template(self, template: SessionTemplate) -> Session:
        return self.start(template.exercises, template_id=template.id, template_name=template.name)

    def complete_current_exercise(self) -> Optional[Exercise]:
        """Mark the exercise at the cursor done and advance. Returns it, or None on a no-op."""
        with self._lock:
            s = self._active
            if s is None or s.cursor >= len(s.exercises):
                return None
            done = replace(s.exercises[s.cursor], completed=True)
            exercises = s.exercises[: s.cursor] + (done,) + s.exercises[s.cursor + 1 :]
            advanced = self._active = replace(s, exercises=exercises, cursor=s.cursor + 1)
        self._notify(
            AnnouncementEvent.EXERCISE_COMPLETE,
            advanced,
            exercise=done,
            next_exercise=advanced.current_exercise,
        )
        return done

    def complete_session(self) -> Optional[Session]:
        """Finalize the active session into history. Sole writer of totals."""
        with self._lock:
            s = self._active
            if s is None:
                return None
            finalized = replace(s, end_date=_now(), completed=True, points_earned=SESSION_REWARD)
            self._history.append(finalized)
            self._totals.sessions += 1
            self._totals.points += SESSION_REWARD
            self._active = None
        log.info("session %s completed (%d/%d exercises)",
                 finalized.id, finalized.completed_count, len(finalized.exercises))
        self._notify(AnnouncementEvent.SESSION_COMPLETE, finalized)
        return finalized

    def cancel_session(self) -> bool:
        with self._lock:
            s = self._active
            if s is None:
                return False
            self._active = None
        log.info("session %s cancelled at cursor %d", s.id, s.cursor)
        self._notify(AnnouncementEvent.CANCEL, s)
        return True

    def _notify(self, event: AnnouncementEvent, session: Session, **context) -> None:
        # Sink failures never affect the state machine
        try:
            self.announcer.announce(event, session, **context)
        except Exception:
            log.warning("announcement %s failed for session %s", event.value, session.id, exc_info=True)
