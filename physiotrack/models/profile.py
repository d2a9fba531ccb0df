from enum import Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, ForeignKey, DateTime, String, JSON, Enum as SAEnum, func
from physiotrack.db import Base

class UserCategory(str, Enum):
    athlete = "athlete"
    post_surgery = "post_surgery"
    elderly = "elderly"
    general = "general"

class AgeGroup(str, Enum):
    young = "young"      # 18-30
    middle = "middle"    # 31-50
    mature = "mature"    # 51-65
    senior = "senior"    # 65+

class ActivityLevel(str, Enum):
    sedentary = "sedentary"
    light = "light"
    moderate = "moderate"
    high = "high"
    athlete = "athlete"

class UserProfile(Base):
    __tablename__ = "user_profiles"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), unique=True, index=True)
    category: Mapped[UserCategory] = mapped_column(SAEnum(UserCategory, name="user_category"), nullable=False)
    age_group: Mapped[AgeGroup] = mapped_column(SAEnum(AgeGroup, name="age_group"), nullable=False)
    activity_level: Mapped[ActivityLevel] = mapped_column(SAEnum(ActivityLevel, name="activity_level"), nullable=False)
    primary_complaint: Mapped[str] = mapped_column(String(255), nullable=False, server_default="")
    goal: Mapped[str] = mapped_column(String(255), nullable=False, server_default="")
    limitations: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    updated_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="profile")
