from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, ForeignKey, DateTime, String, UniqueConstraint, func
from physiotrack.db import Base

class EarnedBadge(Base):
    """Badge definitions live in code; only the unlocks are stored."""
    __tablename__ = "earned_badges"
    __table_args__ = (UniqueConstraint("user_id", "badge_id", name="uq_earned_badge"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    badge_id: Mapped[str] = mapped_column(String(64), nullable=False)
    unlocked_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="badges")
