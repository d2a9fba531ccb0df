from enum import Enum
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, ForeignKey, DateTime, String, Boolean, JSON, Enum as SAEnum, func
from physiotrack.db import Base

class ReminderType(str, Enum):
    exercise = "exercise"
    pain_log = "pain_log"
    custom = "custom"

class Reminder(Base):
    __tablename__ = "reminders"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    title: Mapped[str] = mapped_column(String(120), nullable=False)
    message: Mapped[str] = mapped_column(String(500), nullable=False, server_default="")
    time: Mapped[str] = mapped_column(String(5), nullable=False)  # HH:MM
    days_of_week: Mapped[list] = mapped_column(JSON, nullable=False, default=list)  # 1=Mon .. 7=Sun
    is_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    reminder_type: Mapped[ReminderType] = mapped_column(
        SAEnum(ReminderType, name="reminder_type"), nullable=False, default=ReminderType.exercise
    )
    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now())
