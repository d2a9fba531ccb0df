# physiotrack/services/registry.py
from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from physiotrack.services import catalog
from physiotrack.services.announcements import LoggingAnnouncer, VoiceSettings
from physiotrack.services.session_controller import Session, SessionController, UserTotals

log = logging.getLogger(__name__)

HistoryLoader = Callable[[], list[Session]]


class ControllerRegistry:
    """
    One SessionController per user, owned by the application object.
    Controllers are built lazily, seeded from what is already persisted.
    """

    def __init__(self):
        self._controllers: dict[int, SessionController] = {}
        self._lock = threading.Lock()

    def get(self, user_id: int) -> Optional[SessionController]:
        return self._controllers.get(user_id)

    def get_or_create(
        self,
        user_id: int,
        *,
        totals: UserTotals,
        load_history: HistoryLoader,
        voice: Optional[VoiceSettings] = None,
    ) -> SessionController:
        with self._lock:
            ctrl = self._controllers.get(user_id)
            if ctrl is None:
                history = load_history()
                ctrl = SessionController(
                    history=history,
                    totals=totals,
                    announcer=LoggingAnnouncer(voice, instructions=catalog.instruction_for),
                )
                self._controllers[user_id] = ctrl
                log.debug("controller created for user %s with %d past sessions", user_id, len(history))
            return ctrl

    def update_voice(self, user_id: int, voice: VoiceSettings) -> None:
        ctrl = self.get(user_id)
        if ctrl is not None and isinstance(ctrl.announcer, LoggingAnnouncer):
            ctrl.announcer.settings = voice

    def drop(self, user_id: int) -> None:
        with self._lock:
            self._controllers.pop(user_id, None)

    def __len__(self) -> int:
        return len(self._controllers)
