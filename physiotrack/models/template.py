from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, ForeignKey, DateTime, String, Boolean, func
from physiotrack.db import Base

class SessionTemplate(Base):
    __tablename__ = "session_templates"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    estimated_duration: Mapped[str] = mapped_column(String(32), nullable=False, server_default="")
    is_ai_generated: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="templates")
    exercises = relationship("TemplateExercise", back_populates="template",
                             cascade="all, delete-orphan", order_by="TemplateExercise.position")

class TemplateExercise(Base):
    __tablename__ = "template_exercises"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    template_id: Mapped[int] = mapped_column(ForeignKey("session_templates.id", ondelete="CASCADE"), index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    description: Mapped[str] = mapped_column(String(500), nullable=False, server_default="")

    template = relationship("SessionTemplate", back_populates="exercises")
