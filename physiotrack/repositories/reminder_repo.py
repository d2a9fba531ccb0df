# physiotrack/repositories/reminder_repo.py
from __future__ import annotations

from sqlalchemy import select

from physiotrack.models import Reminder
from physiotrack.repositories.base import BaseRepository

class ReminderRepository(BaseRepository[Reminder]):
    model = Reminder

    def list_by_user(self, user_id: int) -> list[Reminder]:
        stmt = select(Reminder).where(Reminder.user_id == user_id).order_by(Reminder.time.asc(), Reminder.id.asc())
        return list(self.db.execute(stmt).scalars().all())

    def create(self, user_id: int, **fields) -> Reminder:
        return self.add_and_refresh(Reminder(user_id=user_id, **fields))

    def update(self, reminder: Reminder, **fields) -> Reminder:
        for key, value in fields.items():
            setattr(reminder, key, value)
        self.db.commit()
        self.db.refresh(reminder)
        return reminder
