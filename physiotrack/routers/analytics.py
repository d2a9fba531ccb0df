from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from physiotrack.db import get_db
from physiotrack.deps.auth import get_current_user
from physiotrack.deps.session import get_controller
from physiotrack.models import User
from physiotrack.repositories.pain_repo import PainRepository
from physiotrack.schemas.analytics import DailyProgressRead, ProgressReportRead, WeeklyProgressRead
from physiotrack.services import analytics
from physiotrack.services.session_controller import SessionController

router = APIRouter(prefix="/analytics", tags=["analytics"])

@router.get("/daily", response_model=DailyProgressRead)
def daily(current: User = Depends(get_current_user), ctrl: SessionController = Depends(get_controller)):
    progress = analytics.daily_progress(
        ctrl.history,
        session_target=current.daily_session_target,
        point_target=current.daily_point_target,
    )
    # ratios are properties
    return DailyProgressRead.model_validate(progress)

@router.get("/weekly", response_model=WeeklyProgressRead)
def weekly(
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    ctrl: SessionController = Depends(get_controller),
):
    return analytics.weekly_progress(ctrl.history, PainRepository(db).points(current.id))

@router.get("/report", response_model=ProgressReportRead)
def report(
    start: datetime = Query(...),
    end: datetime = Query(...),
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    ctrl: SessionController = Depends(get_controller),
):
    if analytics.as_utc(start) > analytics.as_utc(end):
        raise HTTPException(status_code=400, detail="start must not be after end")
    return analytics.progress_report(list(ctrl.history), PainRepository(db).points(current.id), start, end)
