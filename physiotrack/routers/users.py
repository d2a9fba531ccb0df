from __future__ import annotations
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from physiotrack.db import get_db
from physiotrack.deps.auth import get_current_user, require_role, require_user_or_role
from physiotrack.deps.session import get_registry, voice_settings_for
from physiotrack.models import User
from physiotrack.repositories.session_repo import SessionRepository
from physiotrack.repositories.user_repo import UserRepository
from physiotrack.schemas.session import SessionRead
from physiotrack.schemas.user import GoalsRead, GoalsUpdate, UserCreate, UserRead, VoiceSettingsSchema
from physiotrack.services.registry import ControllerRegistry

router = APIRouter(prefix="/users", tags=["users"])

@router.get("", response_model=list[UserRead], dependencies=[Depends(require_role("admin"))])
def list_users(
    db: Session = Depends(get_db),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    page = UserRepository(db).list(limit=limit, offset=offset)
    return page.items

@router.get("/me/goals", response_model=GoalsRead)
def get_goals(current: User = Depends(get_current_user)):
    return current

@router.put("/me/goals", response_model=GoalsRead)
def put_goals(payload: GoalsUpdate, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return UserRepository(db).update_goals(current, **payload.model_dump())

@router.get("/me/voice", response_model=VoiceSettingsSchema)
def get_voice(current: User = Depends(get_current_user)):
    v = voice_settings_for(current)
    return VoiceSettingsSchema(enabled=v.enabled, announce_start=v.announce_start, announce_complete=v.announce_complete)

@router.put("/me/voice", response_model=VoiceSettingsSchema)
def put_voice(
    payload: VoiceSettingsSchema,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    registry: ControllerRegistry = Depends(get_registry),
):
    user = UserRepository(db).update_voice(current, **payload.model_dump())
    registry.update_voice(user.id, voice_settings_for(user))
    return payload

@router.get("/{user_id}", response_model=UserRead)
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    _auth=Depends(require_user_or_role("user_id", "admin")),  # owner or admin
):
    user = UserRepository(db).get(user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user

@router.get("/{user_id}/sessions", response_model=list[SessionRead])
def get_user_sessions(
    user_id: int,
    db: Session = Depends(get_db),
    _auth=Depends(require_user_or_role("user_id", "clinician", "admin")),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    if not UserRepository(db).get(user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return SessionRepository(db).list_by_user(user_id, limit=limit, offset=offset).items

# Optional admin-only create (register is preferred for normal signups)
@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_role("admin"))])
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    repo = UserRepository(db)
    if repo.get_by_email(payload.email):
        raise HTTPException(status_code=400, detail="email already registered")
    try:
        user = repo.create(email=payload.email, name=payload.name, password_hash="", role="user")
    except ValueError as e:
        if str(e) == "email_already_exists":
            raise HTTPException(status_code=400, detail="email already registered")
        raise
    return user
