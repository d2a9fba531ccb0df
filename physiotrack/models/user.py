from enum import Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, DateTime, func, Enum as SAEnum, Integer, Boolean
from physiotrack.db import Base

class UserRole(str, Enum):
    user = "user"
    clinician = "clinician"
    admin = "admin"

class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False, server_default="")
    role: Mapped[UserRole] = mapped_column(
        SAEnum(UserRole, name="user_role"),
        nullable=False,
        server_default=UserRole.user.value,
    )
    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    # Running totals, kept in step with completed sessions
    total_sessions: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    total_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")

    # Personal goals
    daily_session_target: Mapped[int] = mapped_column(Integer, nullable=False, default=1, server_default="1")
    daily_point_target: Mapped[int] = mapped_column(Integer, nullable=False, default=10, server_default="10")

    # Voice guidance
    voice_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default="1")
    announce_start: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default="1")
    announce_complete: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default="1")

    sessions = relationship("ExerciseSession", back_populates="user", cascade="all, delete-orphan")
    templates = relationship("SessionTemplate", back_populates="user", cascade="all, delete-orphan")
    pain_entries = relationship("PainEntry", back_populates="user", cascade="all, delete-orphan")
    badges = relationship("EarnedBadge", back_populates="user", cascade="all, delete-orphan")
    profile = relationship("UserProfile", back_populates="user", uselist=False, cascade="all, delete-orphan")
