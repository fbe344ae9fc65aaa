import uuid
from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.services.tokens import utcnow


class Review(Base):
    __tablename__ = "reviews"
    __table_args__ = (CheckConstraint("rating >= 1 AND rating <= 5", name="ck_reviews_rating_range"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    platform_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("platforms.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    user_name: Mapped[str] = mapped_column(String(100), nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    date: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    # flagged=False, reviewed=False -> visible
    # flagged=True,  reviewed=False -> waiting for an admin
    # flagged=False, reviewed=True  -> approved by an admin
    # flagged=True,  reviewed=True  -> rejected, stays hidden
    flagged: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    reviewed: Mapped[bool] = mapped_column(Boolean, default=False)

    platform: Mapped["Platform"] = relationship(back_populates="reviews")
