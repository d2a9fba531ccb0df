# physiotrack/services/rewards.py
from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy.orm import Session as DBSession

from physiotrack.models import User
from physiotrack.repositories.badge_repo import BadgeRepository
from physiotrack.repositories.pain_repo import PainRepository
from physiotrack.services.analytics import current_streak
from physiotrack.services.badges import BadgeDefinition, UserStats, check_new_badges
from physiotrack.services.session_controller import Session

log = logging.getLogger(__name__)


def collect_stats(db: DBSession, user: User, history: Sequence[Session]) -> UserStats:
    return UserStats(
        total_sessions=user.total_sessions,
        total_points=user.total_points,
        streak_days=current_streak(s.start_date for s in history),
        pain_levels=[p.level for p in PainRepository(db).points(user.id)],
        exercise_names=[e.name for s in history for e in s.exercises],
    )


def evaluate_and_award(db: DBSession, user: User, history: Sequence[Session]) -> list[BadgeDefinition]:
    """Store and return the badges the user just unlocked."""
    repo = BadgeRepository(db)
    new = check_new_badges(collect_stats(db, user, history), repo.earned_ids(user.id))
    if new:
        repo.award(user.id, new)
        log.info("user %s unlocked badges: %s", user.id, ", ".join(b.id for b in new))
    return new
