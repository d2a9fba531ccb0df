import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from physiotrack.db import get_db
from physiotrack.deps.auth import get_current_user
from physiotrack.deps.session import get_controller
from physiotrack.models import User
from physiotrack.repositories.pain_repo import PainRepository
from physiotrack.schemas.pain_entry import PainEntryCreate, PainEntryRead, PainEntryUpdate
from physiotrack.services.rewards import evaluate_and_award
from physiotrack.services.session_controller import SessionController

log = logging.getLogger(__name__)

router = APIRouter(prefix="/pain-entries", tags=["pain"])

def _owned_or_404(repo: PainRepository, entry_id: int, user_id: int):
    entry = repo.get_owned(entry_id, user_id)
    if not entry:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Pain entry not found")
    return entry

@router.post("", response_model=PainEntryRead, status_code=status.HTTP_201_CREATED)
def create_pain_entry(
    payload: PainEntryCreate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    ctrl: SessionController = Depends(get_controller),
):
    entry = PainRepository(db).create(current.id, **payload.model_dump())
    try:
        evaluate_and_award(db, current, ctrl.history)
    except (SQLAlchemyError, ValueError):
        log.exception("badge evaluation failed for user %s", current.id)
    return entry

@router.get("", response_model=list[PainEntryRead])
def list_pain_entries(
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    return PainRepository(db).list_by_user(current.id, limit=limit, offset=offset).items

@router.get("/{entry_id}", response_model=PainEntryRead)
def get_pain_entry(entry_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return _owned_or_404(PainRepository(db), entry_id, current.id)

@router.patch("/{entry_id}", response_model=PainEntryRead)
def update_pain_entry(
    entry_id: int,
    payload: PainEntryUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    repo = PainRepository(db)
    entry = _owned_or_404(repo, entry_id, current.id)
    return repo.update(entry, **payload.model_dump(exclude_unset=True))

@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_pain_entry(entry_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    repo = PainRepository(db)
    repo.delete(_owned_or_404(repo, entry_id, current.id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
