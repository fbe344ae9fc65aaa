from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class ReviewCreate(BaseModel):
    user_name: str = Field(min_length=2, max_length=100)
    rating: int = Field(ge=1, le=5)
    comment: str | None = Field(None, min_length=10, max_length=500)

    @field_validator("user_name", mode="before")
    @classmethod
    def _strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("comment", mode="before")
    @classmethod
    def _blank_comment(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v


class ReviewOut(BaseModel):
    id: uuid.UUID
    platform_id: uuid.UUID
    user_name: str
    rating: int
    comment: str | None
    date: datetime | None
    flagged: bool
    reviewed: bool

    class Config:
        from_attributes = True


class FlaggedReviewOut(ReviewOut):
    platform_name: str | None = None


class RatingSummary(BaseModel):
    rating: float = 0.0
    review_count: int = 0
