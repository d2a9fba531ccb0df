from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from physiotrack.db import get_db
from physiotrack.deps.auth import get_current_user
from physiotrack.models import User
from physiotrack.repositories.profile_repo import ProfileRepository
from physiotrack.schemas.profile import ProfileRead, ProfileUpdate

router = APIRouter(prefix="/profile", tags=["profile"])

@router.get("", response_model=ProfileRead)
def get_profile(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    profile = ProfileRepository(db).get_for_user(current.id)
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not set")
    return profile

@router.put("", response_model=ProfileRead)
def put_profile(payload: ProfileUpdate, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return ProfileRepository(db).upsert(current.id, **payload.model_dump())
