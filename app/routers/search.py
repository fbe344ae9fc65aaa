from fastapi import APIRouter, Depends, Query

from app.dependencies import get_store, raise_store_failure
from app.schemas.platform import SearchHit
from app.services.ratings import attach_ratings
from app.services.search import rank
from app.services.store import PlatformStore

router = APIRouter(prefix="/search", tags=["search"])


@router.get("", response_model=list[SearchHit])
def search_platforms(
    store: PlatformStore = Depends(get_store),
    q: str = "",
    tag: str | None = None,
    limit: int = Query(50, ge=1, le=200),
):
    platforms = store.fetch_platforms(tag=tag or None, approved_only=True)
    if store.last_error:
        raise_store_failure(store)

    if not q.strip():
        hits = [(p, 0) for p in platforms]
    else:
        hits = rank(q, platforms)
    hits = hits[:limit]

    rated = attach_ratings(store, [p for p, _ in hits])
    return [{"platform": p, "score": score} for p, (_, score) in zip(rated, hits)]
