# physiotrack/deps/session.py
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from physiotrack.db import get_db
from physiotrack.deps.auth import get_current_user
from physiotrack.models import User
from physiotrack.repositories.session_repo import SessionRepository
from physiotrack.services.announcements import VoiceSettings
from physiotrack.services.registry import ControllerRegistry
from physiotrack.services.session_controller import SessionController, UserTotals

def get_registry(request: Request) -> ControllerRegistry:
    return request.app.state.controllers

def voice_settings_for(user: User) -> VoiceSettings:
    return VoiceSettings(
        enabled=user.voice_enabled,
        announce_start=user.announce_start,
        announce_complete=user.announce_complete,
    )

def get_controller(
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    registry: ControllerRegistry = Depends(get_registry),
) -> SessionController:
    return registry.get_or_create(
        current.id,
        totals=UserTotals(sessions=current.total_sessions, points=current.total_points),
        load_history=lambda: SessionRepository(db).history(current.id),
        voice=voice_settings_for(current),
    )
