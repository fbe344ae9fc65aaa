"""
Admin moderation transitions.

Each transition returns True when the row ends up in the target state
(including when it was already there) and False when the row is missing,
the transition is not allowed, or the store failed. Callers are expected to
have checked admin access already.
"""
from __future__ import annotations

import logging
from typing import Any

from app.schemas.platform import PlatformOut
from app.schemas.review import FlaggedReviewOut
from app.services.ratings import refresh_cached_rating
from app.services.state_machine import ensure_transition, platform_state, review_state
from app.services.store import PlatformStore

logger = logging.getLogger(__name__)


def approve_platform(store: PlatformStore, platform_id: Any) -> bool:
    platform = store.fetch_platform(platform_id)
    if platform is None:
        logger.warning("approve_platform: platform %s not found", platform_id)
        return False

    current = platform_state(platform.approved)
    if current == "APPROVED":
        return True

    try:
        ensure_transition("platform", current, "APPROVED")
    except ValueError as e:
        logger.warning("approve_platform %s: %s", platform_id, e)
        return False

    ok = store.set_approved(platform.id)
    if ok:
        logger.info("platform %s approved", platform.id)
    return ok


def delete_platform(store: PlatformStore, platform_id: Any) -> bool:
    platform = store.fetch_platform(platform_id)
    if platform is None:
        if not store.last_error:
            logger.warning("delete_platform: platform %s not found", platform_id)
        return False

    current = platform_state(platform.approved)
    try:
        ensure_transition("platform", current, "DELETED")
    except ValueError as e:
        logger.warning("delete_platform %s: %s", platform_id, e)
        return False

    ok = store.delete_platform_cascade(platform.id)
    if ok:
        logger.info("platform %s deleted (was %s)", platform.id, current)
    return ok


def _move_review(store: PlatformStore, review_id: Any, target: str) -> bool:
    review = store.fetch_review(review_id)
    if review is None:
        logger.warning("review %s not found (wanted %s)", review_id, target)
        return False

    current = review_state(review.flagged, review.reviewed)
    # rejected reviews stay flagged, so flagging them again is a no-op
    if current == target or (target == "FLAGGED" and current == "REJECTED"):
        return True

    try:
        ensure_transition("review", current, target)
    except ValueError as e:
        logger.warning("review %s: %s", review_id, e)
        return False

    if target == "FLAGGED":
        ok = store.update_review_flag(review.id, True, reviewed=False)
    else:
        ok = store.resolve_review(review.id, approved=(target == "APPROVED"))

    if ok:
        logger.info("review %s %s -> %s", review.id, current, target)
        refresh_cached_rating(store, review.platform_id)
    return ok


def flag_review(store: PlatformStore, review_id: Any) -> bool:
    return _move_review(store, review_id, "FLAGGED")


def approve_review(store: PlatformStore, review_id: Any) -> bool:
    return _move_review(store, review_id, "APPROVED")


def reject_review(store: PlatformStore, review_id: Any) -> bool:
    return _move_review(store, review_id, "REJECTED")


def list_pending_platforms(store: PlatformStore) -> list[PlatformOut]:
    return [p for p in store.fetch_platforms(approved_only=False) if not p.approved]


def list_flagged_reviews(store: PlatformStore) -> list[FlaggedReviewOut]:
    return store.fetch_flagged_reviews()
