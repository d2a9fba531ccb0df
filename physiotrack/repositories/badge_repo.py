# physiotrack/repositories/badge_repo.py
from __future__ import annotations
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from physiotrack.models import EarnedBadge
from physiotrack.repositories.base import BaseRepository
from physiotrack.services.badges import BadgeDefinition

class BadgeRepository(BaseRepository[EarnedBadge]):
    model = EarnedBadge

    def list_by_user(self, user_id: int) -> list[EarnedBadge]:
        stmt = select(EarnedBadge).where(EarnedBadge.user_id == user_id).order_by(EarnedBadge.id.asc())
        return list(self.db.execute(stmt).scalars().all())

    def earned_ids(self, user_id: int) -> set[str]:
        stmt = select(EarnedBadge.badge_id).where(EarnedBadge.user_id == user_id)
        return set(self.db.execute(stmt).scalars().all())

    def award(self, user_id: int, badges: Iterable[BadgeDefinition]) -> list[EarnedBadge]:
        rows = [EarnedBadge(user_id=user_id, badge_id=b.id) for b in badges]
        if not rows:
            return []
        self.db.add_all(rows)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ValueError("badge_already_awarded")
        for row in rows:
            self.db.refresh(row)
        return rows
