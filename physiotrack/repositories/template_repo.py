# physiotrack/repositories/template_repo.py
from __future__ import annotations
from typing import Sequence

from sqlalchemy import select

from physiotrack.models import SessionTemplate, TemplateExercise
from physiotrack.repositories.base import BaseRepository
from physiotrack.services import catalog
from physiotrack.services import session_controller as core

class TemplateRepository(BaseRepository[SessionTemplate]):
    model = SessionTemplate

    def list_by_user(self, user_id: int) -> list[SessionTemplate]:
        stmt = select(SessionTemplate).where(SessionTemplate.user_id == user_id)\
                                     .order_by(SessionTemplate.created_at.desc(), SessionTemplate.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    def create(self, user_id: int, *, name: str, exercises: Sequence[core.Exercise],
               is_ai_generated: bool = False) -> SessionTemplate:
        if not exercises:
            raise ValueError("template_without_exercises")
        tpl = SessionTemplate(
            user_id=user_id,
            name=name,
            estimated_duration=catalog.estimated_duration(len(exercises)),
            is_ai_generated=is_ai_generated,
            exercises=[
                TemplateExercise(position=i, name=e.name, description=e.description)
                for i, e in enumerate(exercises)
            ],
        )
        return self.add_and_refresh(tpl)

def to_domain(row: SessionTemplate) -> core.SessionTemplate:
    return core.SessionTemplate(
        id=row.id,
        name=row.name,
        exercises=tuple(core.Exercise(name=e.name, description=e.description) for e in row.exercises),
        created_at=row.created_at,
    )
