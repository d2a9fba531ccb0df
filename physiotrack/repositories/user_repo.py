# physiotrack/repositories/user_repo.py
from __future__ import annotations
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError

from physiotrack.models import User
from physiotrack.repositories.base import BaseRepository, Page

class UserRepository(BaseRepository[User]):
    model = User

    # READS
    def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(func.lower(User.email) == email.lower())
        return self.db.execute(stmt).scalar_one_or_none()

    def list(self, *, limit: int = 50, offset: int = 0) -> Page[User]:
        return self.page_from_stmt(select(User).order_by(User.id.asc()), limit=limit, offset=offset)

    # WRITES
    def create(self, *, email: str, name: str, password_hash: str, role: str = "user") -> User:
        user = User(email=email, name=name, password_hash=password_hash, role=role)
        try:
            return self.add_and_refresh(user)
        except IntegrityError:
            self.db.rollback()
            # Re-raise a clean marker your router can map to 400
            raise ValueError("email_already_exists")

    def set_role(self, user_id: int, *, role: str) -> Optional[User]:
        """Use from an admin-only route; DB enum validates role values."""
        user = self.get(user_id)
        if not user:
            return None
        user.role = role
        self.db.commit()
        self.db.refresh(user)
        return user

    def update_goals(self, user: User, *, daily_session_target: int, daily_point_target: int) -> User:
        user.daily_session_target = daily_session_target
        user.daily_point_target = daily_point_target
        self.db.commit()
        self.db.refresh(user)
        return user

    def update_voice(self, user: User, *, enabled: bool, announce_start: bool, announce_complete: bool) -> User:
        user.voice_enabled = enabled
        user.announce_start = announce_start
        user.announce_complete = announce_complete
        self.db.commit()
        self.db.refresh(user)
        return user
