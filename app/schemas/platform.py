from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field, HttpUrl, field_validator


class PaidPlan(BaseModel):
    name: str
    price: str
    description: str = ""


class Pricing(BaseModel):
    """Pricing descriptor, stored as a camelCase JSON blob on the platform row."""

    has_free: bool = Field(False, alias="hasFree")
    free_description: str | None = Field(None, alias="freeDescription")
    paid_plans: list[PaidPlan] = Field(default_factory=list, alias="paidPlans")

    class Config:
        populate_by_name = True


class PlatformCreate(BaseModel):
    name: str
    description: str
    logo: str | None = None
    url: str
    tags: list[str] = Field(default_factory=list)
    features: list[str] = Field(default_factory=list)
    pricing: Pricing = Field(default_factory=Pricing)
    api_available: bool = False


class SubmissionPricing(BaseModel):
    has_free: bool = False
    free_description: str | None = None
    has_paid: bool = False
    starting_price: str | None = None


class PlatformSubmission(BaseModel):
    name: str = Field(min_length=2, max_length=200)
    description: str = Field(min_length=30, max_length=1000)
    logo: HttpUrl | None = None
    url: HttpUrl
    tags: list[str] = Field(min_length=1)
    custom_tags: str | None = None  # "tag one, tag two"
    features: list[str] = Field(min_length=1)
    api_available: bool = False
    pricing: SubmissionPricing = Field(default_factory=SubmissionPricing)

    @field_validator("name", "description", mode="before")
    @classmethod
    def _strip(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("logo", mode="before")
    @classmethod
    def _blank_logo(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("features", mode="before")
    @classmethod
    def _split_features(cls, v):
        # the form sends one feature per line
        if isinstance(v, str):
            v = v.split("\n")
        if isinstance(v, list):
            return [f.strip() for f in v if isinstance(f, str) and f.strip()]
        return v


class PlatformUpdate(BaseModel):
    name: str | None = Field(None, min_length=2, max_length=200)
    description: str | None = Field(None, min_length=30, max_length=1000)
    logo: str | None = None
    url: HttpUrl | None = None
    tags: list[str] | None = None
    features: list[str] | None = None
    pricing: Pricing | None = None
    api_available: bool | None = None


class PlatformOut(BaseModel):
    id: uuid.UUID
    name: str
    description: str
    logo: str | None
    url: str
    tags: list[str]
    features: list[str]
    pricing: Pricing
    api_available: bool
    rating: float
    review_count: int
    approved: bool
    created_at: datetime | None

    class Config:
        from_attributes = True


class PlatformPage(BaseModel):
    items: list[PlatformOut]
    total: int
    page: int
    page_size: int


class SearchHit(BaseModel):
    platform: PlatformOut
    score: int
