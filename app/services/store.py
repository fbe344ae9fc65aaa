"""
Data access layer for the directory.

PlatformStore wraps one SQLAlchemy session (injected per request) and
translates between table rows and the pydantic domain types. Expected
failures come back as values:

- not found            -> None / False
- store / driver error -> None / False, logged, rolled back, and recorded
                          on ``last_error`` so callers can tell the two apart
"""
from __future__ import annotations

import logging
import uuid
from collections import defaultdict
from typing import Any, Iterable

from pydantic import ValidationError
from sqlalchemy import asc, delete, desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.platform import Platform
from app.models.predefined_tag import PredefinedTag
from app.models.review import Review
from app.schemas.platform import PlatformCreate, PlatformOut, Pricing
from app.schemas.review import FlaggedReviewOut, RatingSummary, ReviewCreate, ReviewOut
from app.services.tokens import utcnow

logger = logging.getLogger(__name__)

# columns that callers may change through update_platform
EDITABLE_FIELDS = {"name", "description", "logo", "url", "tags", "features", "pricing", "api_available"}


def as_uuid(value: Any) -> uuid.UUID | None:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        return None


def merge_tags(*groups: Iterable[str]) -> list[str]:
    """Strip, drop blanks and de-duplicate, keeping first-seen order."""
    seen: set[str] = set()
    merged: list[str] = []
    for group in groups:
        for tag in group:
            tag = (tag or "").strip()
            if tag and tag not in seen:
                seen.add(tag)
                merged.append(tag)
    return merged


def pricing_from_json(blob: Any) -> Pricing:
    # raises ValidationError on a malformed blob
    return Pricing.model_validate(blob or {})


def pricing_to_json(pricing: Pricing | dict) -> dict:
    if isinstance(pricing, dict):
        pricing = pricing_from_json(pricing)
    return pricing.model_dump(by_alias=True)


def platform_to_out(row: Platform, summary: RatingSummary | None = None) -> PlatformOut:
    return PlatformOut(
        id=row.id,
        name=row.name,
        description=row.description,
        logo=row.logo,
        url=row.url,
        tags=list(row.tags or []),
        features=list(row.features or []),
        pricing=pricing_from_json(row.pricing),
        api_available=bool(row.api_available),
        rating=summary.rating if summary else float(row.rating or 0),
        review_count=summary.review_count if summary else int(row.review_count or 0),
        approved=bool(row.approved),
        created_at=row.created_at,
    )


def review_to_out(row: Review) -> ReviewOut:
    return ReviewOut.model_validate(row)


class PlatformStore:
    def __init__(self, db: Session):
        self.db = db
        self.last_error: str | None = None

    def _failed(self, action: str, exc: Exception) -> None:
        self.db.rollback()
        self.last_error = f"{action}: {exc.__class__.__name__}"
        logger.exception("store failure during %s", action)

    def _begin(self) -> None:
        self.last_error = None

    # ---------- platforms ----------

    def fetch_platform(self, platform_id: Any, approved_only: bool = False) -> PlatformOut | None:
        self._begin()
        pid = as_uuid(platform_id)
        if pid is None:
            return None
        try:
            row = self.db.get(Platform, pid)
        except SQLAlchemyError as e:
            self._failed("fetch_platform", e)
            return None

        if not row or (approved_only and not row.approved):
            return None
        try:
            return platform_to_out(row)
        except ValidationError:
            logger.warning("platform %s has a malformed pricing blob", pid)
            return None

    def fetch_platforms(self, tag: str | None = None, approved_only: bool = True) -> list[PlatformOut]:
        self._begin()
        q = select(Platform)
        if approved_only:
            q = q.where(Platform.approved == True)  # noqa
        q = q.order_by(asc(Platform.created_at), asc(Platform.name))

        try:
            rows = self.db.execute(q).scalars().all()
        except SQLAlchemyError as e:
            self._failed("fetch_platforms", e)
            return []

        out: list[PlatformOut] = []
        for row in rows:
            if tag and tag not in (row.tags or []):
                continue
            try:
                out.append(platform_to_out(row))
            except ValidationError:
                logger.warning("skipping platform %s: malformed pricing blob", row.id)
        return out

    def insert_platform(self, data: PlatformCreate) -> PlatformOut | None:
        self._begin()
        row = Platform(
            name=data.name.strip(),
            description=data.description.strip(),
            logo=data.logo or None,
            url=data.url,
            tags=merge_tags(data.tags),
            features=[f.strip() for f in data.features if f.strip()],
            pricing=pricing_to_json(data.pricing),
            api_available=data.api_available,
            rating=0.0,
            review_count=0,
            approved=False,
        )
        try:
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as e:
            self._failed("insert_platform", e)
            return None

        logger.info("platform %s submitted (%s)", row.id, row.name)
        return platform_to_out(row)

    def update_platform(self, platform_id: Any, fields: dict[str, Any]) -> bool:
        self._begin()
        pid = as_uuid(platform_id)
        if pid is None:
            return False

        unknown = set(fields) - EDITABLE_FIELDS
        if unknown:
            logger.warning("ignoring non-editable platform fields: %s", sorted(unknown))

        try:
            row = self.db.get(Platform, pid)
            if not row:
                return False

            for key, value in fields.items():
                if key not in EDITABLE_FIELDS:
                    continue
                if key == "pricing":
                    value = pricing_to_json(value)
                elif key == "tags":
                    value = merge_tags(value)
                elif key == "features":
                    value = [f.strip() for f in value if f.strip()]
                elif key == "url" and value is not None:
                    value = str(value)
                setattr(row, key, value)

            self.db.commit()
        except ValidationError:
            self.db.rollback()
            logger.warning("rejected platform %s update: malformed pricing", pid)
            return False
        except SQLAlchemyError as e:
            self._failed("update_platform", e)
            return False
        return True

    def set_approved(self, platform_id: Any) -> bool:
        # one-way: nothing in the store moves a platform back to pending
        self._begin()
        pid = as_uuid(platform_id)
        if pid is None:
            return False
        try:
            row = self.db.get(Platform, pid)
            if not row:
                return False
            row.approved = True
            self.db.commit()
        except SQLAlchemyError as e:
            self._failed("set_approved", e)
            return False
        return True

    def delete_platform_cascade(self, platform_id: Any) -> bool:
        """Delete a platform and all of its reviews in one transaction."""
        self._begin()
        pid = as_uuid(platform_id)
        if pid is None:
            return False
        try:
            if self.db.get(Platform, pid) is None:
                return False
            removed = self.db.execute(delete(Review).where(Review.platform_id == pid)).rowcount
            self.db.execute(delete(Platform).where(Platform.id == pid))
            self.db.commit()
        except SQLAlchemyError as e:
            self._failed("delete_platform_cascade", e)
            return False

        logger.info("platform %s deleted with %s review(s)", pid, removed)
        return True

    def write_rating_cache(self, platform_id: Any, summary: RatingSummary) -> bool:
        self._begin()
        pid = as_uuid(platform_id)
        if pid is None:
            return False
        try:
            row = self.db.get(Platform, pid)
            if not row:
                return False
            row.rating = summary.rating
            row.review_count = summary.review_count
            self.db.commit()
        except SQLAlchemyError as e:
            self._failed("write_rating_cache", e)
            return False
        return True

    # ---------- reviews ----------

    def fetch_review(self, review_id: Any) -> ReviewOut | None:
        self._begin()
        rid = as_uuid(review_id)
        if rid is None:
            return None
        try:
            row = self.db.get(Review, rid)
        except SQLAlchemyError as e:
            self._failed("fetch_review", e)
            return None
        return review_to_out(row) if row else None

    def fetch_reviews_for_platform(self, platform_id: Any, include_flagged: bool = True) -> list[ReviewOut]:
        self._begin()
        pid = as_uuid(platform_id)
        if pid is None:
            return []
        q = select(Review).where(Review.platform_id == pid)
        if not include_flagged:
            q = q.where(Review.flagged == False)  # noqa
        q = q.order_by(desc(Review.date))
        try:
            rows = self.db.execute(q).scalars().all()
        except SQLAlchemyError as e:
            self._failed("fetch_reviews_for_platform", e)
            return []
        return [review_to_out(r) for r in rows]

    def fetch_ratings(self, platform_ids: Iterable[Any]) -> dict[uuid.UUID, list[int]] | None:
        """Star values per platform in one query. None when the store fails."""
        self._begin()
        ids = [pid for pid in (as_uuid(x) for x in platform_ids) if pid is not None]
        ratings: dict[uuid.UUID, list[int]] = defaultdict(list)
        if not ids:
            return dict(ratings)
        q = select(Review.platform_id, Review.rating).where(Review.platform_id.in_(ids))
        try:
            rows = self.db.execute(q).all()
        except SQLAlchemyError as e:
            self._failed("fetch_ratings", e)
            return None
        for pid, value in rows:
            ratings[pid].append(value)
        return dict(ratings)

    def fetch_flagged_reviews(self) -> list[FlaggedReviewOut]:
        """Flagged reviews still waiting for an admin, newest first."""
        self._begin()
        q = (
            select(Review, Platform.name)
            .join(Platform, Platform.id == Review.platform_id)
            .where(Review.flagged == True)  # noqa
            .where(Review.reviewed == False)  # noqa
            .order_by(desc(Review.date))
        )
        try:
            rows = self.db.execute(q).all()
        except SQLAlchemyError as e:
            self._failed("fetch_flagged_reviews", e)
            return []
        return [
            FlaggedReviewOut(**review_to_out(review).model_dump(), platform_name=name)
            for review, name in rows
        ]

    def insert_review(self, platform_id: Any, data: ReviewCreate) -> ReviewOut | None:
        self._begin()
        pid = as_uuid(platform_id)
        if pid is None:
            return None
        try:
            if self.db.get(Platform, pid) is None:
                return None
            row = Review(
                platform_id=pid,
                user_name=data.user_name,
                rating=data.rating,
                comment=data.comment,
                date=utcnow(),
                flagged=False,
                reviewed=False,
            )
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as e:
            self._failed("insert_review", e)
            return None
        return review_to_out(row)

    def update_review_flag(self, review_id: Any, flagged: bool, reviewed: bool | None = None) -> bool:
        self._begin()
        rid = as_uuid(review_id)
        if rid is None:
            return False
        try:
            row = self.db.get(Review, rid)
            if not row:
                return False
            row.flagged = flagged
            if reviewed is not None:
                row.reviewed = reviewed
            self.db.commit()
        except SQLAlchemyError as e:
            self._failed("update_review_flag", e)
            return False
        return True

    def resolve_review(self, review_id: Any, approved: bool) -> bool:
        # approved -> flagged=False; rejected -> stays flagged. Both are marked reviewed.
        return self.update_review_flag(review_id, flagged=not approved, reviewed=True)

    # ---------- tags ----------

    def all_tags(self) -> list[str]:
        """Distinct tags used by approved platforms."""
        self._begin()
        try:
            rows = self.db.execute(select(Platform.tags).where(Platform.approved == True)).scalars().all()  # noqa
        except SQLAlchemyError as e:
            self._failed("all_tags", e)
            return []
        tags: set[str] = set()
        for group in rows:
            tags.update(t for t in (group or []) if t)
        return sorted(tags)

    def predefined_tags(self) -> list[str]:
        self._begin()
        try:
            return list(
                self.db.execute(select(PredefinedTag.name).order_by(asc(PredefinedTag.name))).scalars().all()
            )
        except SQLAlchemyError as e:
            self._failed("predefined_tags", e)
            return []

    def add_predefined_tag(self, name: str) -> str | None:
        self._begin()
        name = (name or "").strip()
        if not name:
            return None
        try:
            existing = self.db.execute(select(PredefinedTag).where(PredefinedTag.name == name)).scalars().first()
            if existing:
                return existing.name
            self.db.add(PredefinedTag(name=name))
            self.db.commit()
        except SQLAlchemyError as e:
            self._failed("add_predefined_tag", e)
            return None
        return name
