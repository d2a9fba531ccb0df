from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from physiotrack.db import get_db
from physiotrack.deps.auth import get_current_user
from physiotrack.models import User
from physiotrack.repositories.reminder_repo import ReminderRepository
from physiotrack.schemas.reminder import ReminderCreate, ReminderRead, ReminderUpdate

router = APIRouter(prefix="/reminders", tags=["reminders"])

def _owned_or_404(repo: ReminderRepository, reminder_id: int, user_id: int):
    reminder = repo.get_owned(reminder_id, user_id)
    if not reminder:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Reminder not found")
    return reminder

@router.post("", response_model=ReminderRead, status_code=status.HTTP_201_CREATED)
def create_reminder(payload: ReminderCreate, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return ReminderRepository(db).create(current.id, **payload.model_dump())

@router.get("", response_model=list[ReminderRead])
def list_reminders(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return ReminderRepository(db).list_by_user(current.id)

@router.patch("/{reminder_id}", response_model=ReminderRead)
def update_reminder(
    reminder_id: int,
    payload: ReminderUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    repo = ReminderRepository(db)
    reminder = _owned_or_404(repo, reminder_id, current.id)
    return repo.update(reminder, **payload.model_dump(exclude_unset=True))

@router.delete("/{reminder_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_reminder(reminder_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    repo = ReminderRepository(db)
    repo.delete(_owned_or_404(repo, reminder_id, current.id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
