"""
SkillSwap — SkillOffer model (a sub-skill a user offers, with a price).
"""

from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, Integer, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from skillswap.database import Base


class SkillOffer(Base):
    __tablename__ = "user_sub_skills"

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    sub_skill_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, comment="Catalog sub-skill id (external)"
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    value: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # ── Relationships ──────────────────────────────────────────────
    user: Mapped["User"] = relationship("User", back_populates="skill_offers")

    def __repr__(self) -> str:
        return f"<SkillOffer user={self.user_id} sub_skill={self.sub_skill_id}>"
