# physiotrack/repositories/pain_repo.py
from __future__ import annotations

from sqlalchemy import select

from physiotrack.models import PainEntry
from physiotrack.repositories.base import BaseRepository, Page
from physiotrack.services.analytics import PainPoint

class PainRepository(BaseRepository[PainEntry]):
    model = PainEntry

    def list_by_user(self, user_id: int, *, limit: int = 50, offset: int = 0) -> Page[PainEntry]:
        stmt = select(PainEntry).where(PainEntry.user_id == user_id)\
                                .order_by(PainEntry.created_at.desc(), PainEntry.id.desc())
        return self.page_from_stmt(stmt, limit=limit, offset=offset)

    def points(self, user_id: int) -> list[PainPoint]:
        """Pain levels oldest first."""
        stmt = select(PainEntry.created_at, PainEntry.pain_level)\
            .where(PainEntry.user_id == user_id)\
            .order_by(PainEntry.created_at.asc(), PainEntry.id.asc())
        return [PainPoint(at=at, level=level) for at, level in self.db.execute(stmt).all()]

    def create(self, user_id: int, **fields) -> PainEntry:
        return self.add_and_refresh(PainEntry(user_id=user_id, **fields))

    def update(self, entry: PainEntry, **fields) -> PainEntry:
        for key, value in fields.items():
            setattr(entry, key, value)
        self.db.commit()
        self.db.refresh(entry)
        return entry
