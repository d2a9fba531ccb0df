from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from physiotrack.db import get_db
from physiotrack.deps.auth import get_current_user
from physiotrack.models import User
from physiotrack.repositories.badge_repo import BadgeRepository
from physiotrack.schemas.badge import BadgeRead, EarnedBadgeRead
from physiotrack.services.badges import ALL_BADGES, BADGES_BY_ID

router = APIRouter(prefix="/badges", tags=["badges"])

@router.get("", response_model=list[BadgeRead])
def list_badges():
    return list(ALL_BADGES)

@router.get("/me", response_model=list[EarnedBadgeRead])
def my_badges(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    out = []
    for row in BadgeRepository(db).list_by_user(current.id):
        badge = BADGES_BY_ID.get(row.badge_id)
        if badge is None:
            # retired badge id
            continue
        out.append(EarnedBadgeRead(
            id=badge.id, name=badge.name, description=badge.description,
            icon=badge.icon, category=badge.category, unlocked_at=row.unlocked_at,
        ))
    return out
