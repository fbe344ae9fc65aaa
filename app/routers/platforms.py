import uuid

from fastapi import APIRouter, Depends, HTTPException, Query

from app.config import DIRECTORY_PAGE_SIZE, MAX_PAGE_SIZE
from app.dependencies import get_store, raise_store_failure
from app.schemas.platform import PlatformOut, PlatformPage, PlatformSubmission, PlatformUpdate
from app.schemas.review import ReviewCreate, ReviewOut
from app.services.authz import require_admin
from app.services.ratings import attach_ratings
from app.services.search import search
from app.services.store import PlatformStore
from app.services.submissions import submit_platform, submit_review

router = APIRouter(prefix="/platforms", tags=["platforms"])


@router.get("", response_model=PlatformPage)
def list_platforms(
    store: PlatformStore = Depends(get_store),
    q: str | None = None,
    tag: str | None = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(DIRECTORY_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
):
    platforms = store.fetch_platforms(tag=tag or None, approved_only=True)
    if store.last_error:
        raise_store_failure(store)

    results = search(q or "", platforms)

    start = (page - 1) * page_size
    items = attach_ratings(store, results[start:start + page_size])
    return {"items": items, "total": len(results), "page": page, "page_size": page_size}


@router.get("/compare", response_model=list[PlatformOut])
def compare_platforms(store: PlatformStore = Depends(get_store), ids: list[str] = Query(default=[], alias="id")):
    found = []
    for pid in ids:
        p = store.fetch_platform(pid, approved_only=True)
        if p is not None:
            found.append(p)
    return attach_ratings(store, found)


@router.get("/{platform_id}", response_model=PlatformOut)
def get_platform(platform_id: uuid.UUID, store: PlatformStore = Depends(get_store)):
    p = store.fetch_platform(platform_id, approved_only=True)
    if not p:
        raise_store_failure(store, "Platform not found")
    return attach_ratings(store, [p])[0]


@router.post("", response_model=PlatformOut, status_code=201)
def create_platform(payload: PlatformSubmission, store: PlatformStore = Depends(get_store)):
    p = submit_platform(store, payload)
    if not p:
        raise HTTPException(status_code=503, detail="Unable to submit the platform. Please try again.")
    return p


@router.patch("/{platform_id}", response_model=PlatformOut, dependencies=[Depends(require_admin)])
def update_platform(platform_id: uuid.UUID, payload: PlatformUpdate, store: PlatformStore = Depends(get_store)):
    # only logo may be cleared
    fields = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None or k == "logo"}
    if not fields:
        raise HTTPException(status_code=400, detail="No fields to update")

    if not store.update_platform(platform_id, fields):
        if store.last_error:
            raise_store_failure(store)
        if store.fetch_platform(platform_id) is None:
            raise HTTPException(status_code=404, detail="Platform not found")
        raise HTTPException(status_code=400, detail="Invalid platform fields")

    p = store.fetch_platform(platform_id)
    if not p:
        raise_store_failure(store, "Platform not found")
    return attach_ratings(store, [p])[0]


@router.get("/{platform_id}/reviews", response_model=list[ReviewOut])
def list_reviews(platform_id: uuid.UUID, store: PlatformStore = Depends(get_store)):
    if not store.fetch_platform(platform_id, approved_only=True):
        raise_store_failure(store, "Platform not found")
    # flagged reviews stay hidden until an admin approves them
    reviews = store.fetch_reviews_for_platform(platform_id, include_flagged=False)
    if store.last_error:
        raise_store_failure(store)
    return reviews


@router.post("/{platform_id}/reviews", response_model=ReviewOut, status_code=201)
def add_review(platform_id: uuid.UUID, payload: ReviewCreate, store: PlatformStore = Depends(get_store)):
    if not store.fetch_platform(platform_id, approved_only=True):
        raise_store_failure(store, "Platform not found")

    review = submit_review(store, platform_id, payload)
    if not review:
        raise_store_failure(store, "Platform not found")
    return review
