# physiotrack/repositories/recommendation_repo.py
from __future__ import annotations

from sqlalchemy import select

from physiotrack.models import AIRecommendation
from physiotrack.repositories.base import BaseRepository
from physiotrack.services.recommendations import Recommendation

class RecommendationRepository(BaseRepository[AIRecommendation]):
    model = AIRecommendation

    def list_by_user(self, user_id: int, *, limit: int = 20) -> list[AIRecommendation]:
        stmt = select(AIRecommendation).where(AIRecommendation.user_id == user_id)\
                                       .order_by(AIRecommendation.id.desc()).limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    def create(self, user_id: int, rec: Recommendation) -> AIRecommendation:
        return self.add_and_refresh(AIRecommendation(
            user_id=user_id,
            session_name=rec.session_name,
            description=rec.description,
            exercises=list(rec.exercises),
            estimated_duration=rec.estimated_duration,
            special_notes=rec.special_notes,
            confidence=rec.confidence,
        ))

    def mark_accepted(self, rec: AIRecommendation, template_id: int) -> AIRecommendation:
        rec.is_accepted = True
        rec.accepted_template_id = template_id
        self.db.commit()
        self.db.refresh(rec)
        return rec
