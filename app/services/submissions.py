from __future__ import annotations

import logging
from typing import Any

from app.schemas.platform import PaidPlan, PlatformCreate, PlatformOut, PlatformSubmission, Pricing
from app.schemas.review import ReviewCreate, ReviewOut
from app.services.ratings import refresh_cached_rating
from app.services.store import PlatformStore, merge_tags

logger = logging.getLogger(__name__)


def split_custom_tags(raw: str | None) -> list[str]:
    return [t.strip() for t in (raw or "").split(",") if t.strip()]


def build_platform(submission: PlatformSubmission) -> PlatformCreate:
    """Turn the submission form payload into a new (unapproved) platform."""
    sp = submission.pricing

    plans: list[PaidPlan] = []
    if sp.has_paid:
        price = (sp.starting_price or "").strip()
        plans.append(PaidPlan(name="Paid", price=price, description=f"Starting at {price}" if price else ""))

    free_description = (sp.free_description or "").strip() or None

    return PlatformCreate(
        name=submission.name,
        description=submission.description,
        logo=str(submission.logo) if submission.logo else None,
        url=str(submission.url),
        tags=merge_tags(submission.tags, split_custom_tags(submission.custom_tags)),
        features=list(submission.features),
        pricing=Pricing(
            has_free=sp.has_free,
            free_description=free_description if sp.has_free else None,
            paid_plans=plans,
        ),
        api_available=submission.api_available,
    )


def submit_platform(store: PlatformStore, submission: PlatformSubmission) -> PlatformOut | None:
    return store.insert_platform(build_platform(submission))


def submit_review(store: PlatformStore, platform_id: Any, data: ReviewCreate) -> ReviewOut | None:
    review = store.insert_review(platform_id, data)
    if review is None:
        return None
    refresh_cached_rating(store, review.platform_id)
    logger.info("review %s added to platform %s (%s stars)", review.id, review.platform_id, review.rating)
    return review
