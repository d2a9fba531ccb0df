# physiotrack/repositories/session_repo.py
from __future__ import annotations

from sqlalchemy import select

from physiotrack.models import ExerciseSession, SessionExercise, User
from physiotrack.repositories.base import BaseRepository, Page
from physiotrack.services import session_controller as core

class SessionRepository(BaseRepository[ExerciseSession]):
    model = ExerciseSession

    def list_by_user(self, user_id: int, *, limit: int = 50, offset: int = 0) -> Page[ExerciseSession]:
        stmt = select(ExerciseSession).where(ExerciseSession.user_id == user_id)\
                                     .order_by(ExerciseSession.ended_at.desc(), ExerciseSession.id.desc())
        return self.page_from_stmt(stmt, limit=limit, offset=offset)

    def history(self, user_id: int) -> list[core.Session]:
        """All completed sessions in completion order, as domain objects."""
        stmt = select(ExerciseSession).where(ExerciseSession.user_id == user_id)\
                                     .order_by(ExerciseSession.ended_at.asc(), ExerciseSession.id.asc())
        return [to_domain(row) for row in self.db.execute(stmt).scalars().all()]

    def record_completion(self, user: User, session: core.Session) -> ExerciseSession:
        """Store a finalized session and bump the user's totals in one commit."""
        row = ExerciseSession(
            uid=session.id,
            user_id=user.id,
            template_id=session.template_id,
            template_name=session.template_name,
            started_at=session.start_date,
            ended_at=session.end_date,
            points_earned=session.points_earned,
            exercises=[
                SessionExercise(position=i, name=e.name, description=e.description, completed=e.completed)
                for i, e in enumerate(session.exercises)
            ],
        )
        user.total_sessions += 1
        user.total_points += session.points_earned
        try:
            return self.add_and_refresh(row)
        except Exception:
            self.db.rollback()
            raise

def to_domain(row: ExerciseSession) -> core.Session:
    exercises = tuple(
        core.Exercise(name=e.name, description=e.description, completed=e.completed)
        for e in row.exercises
    )
    return core.Session(
        id=row.uid,
        exercises=exercises,
        start_date=row.started_at,
        end_date=row.ended_at,
        completed=True,
        points_earned=row.points_earned,
        cursor=len(exercises),
        template_id=row.template_id,
        template_name=row.template_name,
    )
