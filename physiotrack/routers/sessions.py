import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from physiotrack.db import get_db
from physiotrack.deps.auth import get_current_user
from physiotrack.deps.session import get_controller
from physiotrack.models import User  # type only
from physiotrack.repositories.session_repo import SessionRepository
from physiotrack.repositories.template_repo import TemplateRepository, to_domain as template_to_domain
from physiotrack.schemas.badge import BadgeRead
from physiotrack.schemas.session import (
    ActiveSessionRead, ExerciseRead, SessionCompletion, SessionRead, SessionStart, TotalsRead,
)
from physiotrack.services import catalog
from physiotrack.services.rewards import evaluate_and_award
from physiotrack.services.session_controller import (
    EmptyExerciseSelection, Exercise, SessionAlreadyActive, SessionController,
)

log = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])

def active_view(ctrl: SessionController) -> ActiveSessionRead:
    s = ctrl.active_session
    if s is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No active session")
    current = ctrl.current_exercise
    return ActiveSessionRead(
        id=s.id,
        template_id=s.template_id,
        template_name=s.template_name,
        exercises=[ExerciseRead.model_validate(e) for e in s.exercises],
        start_date=s.start_date,
        cursor=ctrl.cursor,
        current_exercise=ExerciseRead.model_validate(current) if current else None,
        current_completed=ctrl.is_current_exercise_completed(),
        all_completed=ctrl.are_all_exercises_completed(),
    )

@router.post("/active", response_model=ActiveSessionRead, status_code=status.HTTP_201_CREATED)
def start_session(
    payload: SessionStart,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    ctrl: SessionController = Depends(get_controller),
):
    try:
        if payload.template_id is not None:
            tpl = TemplateRepository(db).get_owned(payload.template_id, current.id)
            if not tpl:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Template not found")
            ctrl.start_from_template(template_to_domain(tpl))
        else:
            exercises = [
                Exercise(name=e.name, description=e.description) if e.description
                else catalog.resolve_exercise(e.name)
                for e in payload.exercises
            ]
            ctrl.start(exercises)
    except EmptyExerciseSelection as e:
        raise HTTPException(status_code=422, detail=str(e))
    except SessionAlreadyActive as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return active_view(ctrl)

@router.get("/active", response_model=ActiveSessionRead)
def get_active_session(ctrl: SessionController = Depends(get_controller)):
    return active_view(ctrl)

@router.post("/active/advance", response_model=ActiveSessionRead)
def complete_current_exercise(ctrl: SessionController = Depends(get_controller)):
    # Already at the end: state is returned unchanged
    ctrl.complete_current_exercise()
    return active_view(ctrl)

@router.post("/active/complete", response_model=SessionCompletion)
def complete_session(
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    ctrl: SessionController = Depends(get_controller),
):
    finalized = ctrl.complete_session()
    if finalized is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No active session")

    # The in-memory transition stands even if storage fails
    persisted = True
    try:
        SessionRepository(db).record_completion(current, finalized)
    except SQLAlchemyError:
        log.exception("could not persist session %s for user %s", finalized.id, current.id)
        persisted = False

    new_badges = []
    if persisted:
        try:
            new_badges = evaluate_and_award(db, current, ctrl.history)
        except (SQLAlchemyError, ValueError):
            log.exception("badge evaluation failed for user %s", current.id)

    totals = ctrl.user_totals
    return SessionCompletion(
        session_id=finalized.id,
        template_name=finalized.template_name,
        end_date=finalized.end_date,
        points_earned=finalized.points_earned,
        exercises=[ExerciseRead.model_validate(e) for e in finalized.exercises],
        totals=TotalsRead(sessions=totals.sessions, points=totals.points),
        persisted=persisted,
        new_badges=[BadgeRead.model_validate(b) for b in new_badges],
    )

@router.delete("/active", status_code=status.HTTP_204_NO_CONTENT)
def cancel_session(ctrl: SessionController = Depends(get_controller)):
    if not ctrl.cancel_session():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No active session")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("", response_model=list[SessionRead])
def list_my_sessions(
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    return SessionRepository(db).list_by_user(current.id, limit=limit, offset=offset).items
