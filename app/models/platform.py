import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, Float, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.services.tokens import utcnow


class Platform(Base):
    __tablename__ = "platforms"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    logo: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    url: Mapped[str] = mapped_column(String(1000), nullable=False)

    tags: Mapped[list[str]] = mapped_column(JSON, default=list)
    features: Mapped[list[str]] = mapped_column(JSON, default=list)
    # {"hasFree": bool, "freeDescription": str | null, "paidPlans": [{"name", "price", "description"}]}
    pricing: Mapped[dict] = mapped_column(JSON, default=dict)
    api_available: Mapped[bool] = mapped_column(Boolean, default=False)

    # cache only, rewritten from the review set after every review mutation
    rating: Mapped[float] = mapped_column(Float, default=0.0)
    review_count: Mapped[int] = mapped_column(Integer, default=0)

    approved: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    reviews: Mapped[list["Review"]] = relationship(
        back_populates="platform",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
