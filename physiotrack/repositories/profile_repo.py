# physiotrack/repositories/profile_repo.py
from __future__ import annotations
from typing import Optional

from sqlalchemy import select

from physiotrack.models import UserProfile
from physiotrack.repositories.base import BaseRepository

class ProfileRepository(BaseRepository[UserProfile]):
    model = UserProfile

    def get_for_user(self, user_id: int) -> Optional[UserProfile]:
        stmt = select(UserProfile).where(UserProfile.user_id == user_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def upsert(self, user_id: int, **fields) -> UserProfile:
        profile = self.get_for_user(user_id)
        if profile is None:
            return self.add_and_refresh(UserProfile(user_id=user_id, **fields))
        for key, value in fields.items():
            setattr(profile, key, value)
        self.db.commit()
        self.db.refresh(profile)
        return profile
