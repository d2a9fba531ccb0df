import logging
from collections import Counter

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from physiotrack.db import get_db
from physiotrack.deps.auth import get_current_user
from physiotrack.deps.session import get_controller
from physiotrack.models import User, UserProfile
from physiotrack.repositories.pain_repo import PainRepository
from physiotrack.repositories.profile_repo import ProfileRepository
from physiotrack.repositories.recommendation_repo import RecommendationRepository
from physiotrack.repositories.template_repo import TemplateRepository
from physiotrack.schemas.recommendation import ImprovementsRead, RecommendationRead
from physiotrack.schemas.template import TemplateRead
from physiotrack.services import catalog
from physiotrack.services.recommendations import (
    MAX_NAME_LENGTH, ProfileSnapshot, RecommendationService, clamp_to_columns,
)
from physiotrack.services.session_controller import SessionController

log = logging.getLogger(__name__)

router = APIRouter(prefix="/recommendations", tags=["recommendations"])

RECENT_SESSIONS = 5

def get_recommender(request: Request) -> RecommendationService:
    return request.app.state.recommender

def _snapshot_or_409(db: Session, user_id: int) -> ProfileSnapshot:
    profile: UserProfile | None = ProfileRepository(db).get_for_user(user_id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Complete your profile first")
    return ProfileSnapshot(
        category=profile.category,
        age_group=profile.age_group,
        activity_level=profile.activity_level,
        primary_complaint=profile.primary_complaint,
        goal=profile.goal,
        limitations=list(profile.limitations or []),
    )

@router.post("", response_model=RecommendationRead, status_code=status.HTTP_201_CREATED)
def generate(
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    ctrl: SessionController = Depends(get_controller),
    recommender: RecommendationService = Depends(get_recommender),
):
    snapshot = _snapshot_or_409(db, current.id)
    pain = PainRepository(db).points(current.id)
    recent = [s.template_name for s in ctrl.history[-RECENT_SESSIONS:] if s.template_name]
    rec = recommender.suggest_session(
        snapshot,
        current_pain=pain[-1].level if pain else None,
        previous_sessions=recent,
    )
    return RecommendationRepository(db).create(current.id, clamp_to_columns(rec))

@router.get("", response_model=list[RecommendationRead])
def list_recommendations(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return RecommendationRepository(db).list_by_user(current.id)

@router.post("/{rec_id}/accept", response_model=TemplateRead, status_code=status.HTTP_201_CREATED)
def accept(rec_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    recs = RecommendationRepository(db)
    rec = recs.get_owned(rec_id, current.id)
    if not rec:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recommendation not found")
    if rec.is_accepted:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Recommendation already accepted")

    exercises = [catalog.resolve_exercise(name[:MAX_NAME_LENGTH], "AI suggestion") for name in rec.exercises]
    tpl = TemplateRepository(db).create(current.id, name=rec.session_name[:MAX_NAME_LENGTH],
                                        exercises=exercises, is_ai_generated=True)
    recs.mark_accepted(rec, tpl.id)
    return tpl

@router.get("/improvements", response_model=ImprovementsRead)
def improvements(
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    ctrl: SessionController = Depends(get_controller),
    recommender: RecommendationService = Depends(get_recommender),
):
    snapshot = _snapshot_or_409(db, current.id)
    pain = [p.level for p in PainRepository(db).points(current.id)]
    freq = Counter(e.name for s in ctrl.history for e in s.exercises)
    suggestions = recommender.suggest_improvements(
        snapshot,
        pain_history=pain,
        frequent_exercises=[name for name, _ in freq.most_common(5)],
    )
    return ImprovementsRead(suggestions=suggestions)
