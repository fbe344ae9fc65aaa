"""
Rating aggregation.

A platform's rating and review count are always recomputed from its review
rows (flagged reviews included). The rating/review_count columns on the
platform row are only a cache, rewritten by refresh_cached_rating after
every review mutation.
"""
from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Sequence

from app.schemas.platform import PlatformOut
from app.schemas.review import RatingSummary
from app.services.store import PlatformStore, as_uuid

logger = logging.getLogger(__name__)

ONE_DECIMAL = Decimal("0.1")


def summarize_ratings(ratings: Iterable[int]) -> RatingSummary:
    values = list(ratings)
    if not values:
        return RatingSummary(rating=0.0, review_count=0)

    mean = Decimal(sum(values)) / Decimal(len(values))
    rounded = mean.quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP)
    return RatingSummary(rating=float(rounded), review_count=len(values))


def aggregate_rating(store: PlatformStore, platform_id: Any) -> RatingSummary | None:
    reviews = store.fetch_reviews_for_platform(platform_id, include_flagged=True)
    if store.last_error:
        return None
    return summarize_ratings(r.rating for r in reviews)


def aggregate_many(store: PlatformStore, platform_ids: Iterable[Any]) -> dict[Any, RatingSummary] | None:
    ids = [as_uuid(x) for x in platform_ids]
    ratings = store.fetch_ratings(i for i in ids if i is not None)
    if ratings is None:
        return None
    return {pid: summarize_ratings(ratings.get(pid, [])) for pid in ids if pid is not None}


def attach_ratings(store: PlatformStore, platforms: Sequence[PlatformOut]) -> list[PlatformOut]:
    """Copies of the platforms carrying freshly computed rating/review_count."""
    summaries = aggregate_many(store, [p.id for p in platforms])
    if summaries is None:
        logger.warning("rating recompute failed; serving cached ratings for %s platform(s)", len(platforms))
        return list(platforms)

    return [
        p.model_copy(update={"rating": summaries[p.id].rating, "review_count": summaries[p.id].review_count})
        for p in platforms
    ]


def refresh_cached_rating(store: PlatformStore, platform_id: Any) -> RatingSummary | None:
    summary = aggregate_rating(store, platform_id)
    if summary is None:
        return None
    store.write_rating_cache(platform_id, summary)
    return summary
