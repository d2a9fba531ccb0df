from enum import Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, ForeignKey, DateTime, String, Text, Enum as SAEnum, func
from physiotrack.db import Base

class BodyPart(str, Enum):
    neck = "neck"
    shoulder = "shoulder"
    arm = "arm"
    elbow = "elbow"
    wrist = "wrist"
    back = "back"
    lower_back = "lower_back"
    hip = "hip"
    knee = "knee"
    ankle = "ankle"
    general = "general"

class Mood(str, Enum):
    good = "good"
    neutral = "neutral"
    bad = "bad"

class PainEntry(Base):
    __tablename__ = "pain_entries"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    session_uid: Mapped[str | None] = mapped_column(String(36), nullable=True)
    pain_level: Mapped[int] = mapped_column(Integer, nullable=False)
    body_part: Mapped[BodyPart] = mapped_column(SAEnum(BodyPart, name="body_part"), nullable=False)
    mood: Mapped[Mood | None] = mapped_column(SAEnum(Mood, name="mood"), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="pain_entries")
