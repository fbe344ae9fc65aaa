from __future__ import annotations

import uuid
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from app.dependencies import get_store, raise_store_failure
from app.schemas.moderation import BulkPlatformApproveRequest, BulkPlatformApproveResult, TransitionResult
from app.schemas.platform import PlatformOut
from app.schemas.review import FlaggedReviewOut
from app.schemas.tag import TagCreate
from app.services import moderation
from app.services.authz import require_admin
from app.services.state_machine import platform_state, review_state
from app.services.store import PlatformStore

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def _platform_conflict(store: PlatformStore, platform_id: uuid.UUID):
    if store.last_error:
        raise_store_failure(store)
    if store.fetch_platform(platform_id) is None:
        raise_store_failure(store, "Platform not found")
    raise HTTPException(status_code=409, detail="Invalid platform transition")


def _review_conflict(store: PlatformStore, review_id: uuid.UUID):
    if store.last_error:
        raise_store_failure(store)
    review = store.fetch_review(review_id)
    if review is None:
        raise_store_failure(store, "Review not found")
    state = review_state(review.flagged, review.reviewed)
    raise HTTPException(status_code=409, detail=f"Review is {state}; only FLAGGED reviews can be resolved")


@router.get("/platforms/pending", response_model=list[PlatformOut])
def pending_platforms(store: PlatformStore = Depends(get_store)):
    items = moderation.list_pending_platforms(store)
    if store.last_error:
        raise_store_failure(store)
    return items


@router.post("/platforms/approve", response_model=BulkPlatformApproveResult)
def bulk_approve(payload: BulkPlatformApproveRequest, store: PlatformStore = Depends(get_store)):
    approved = 0
    skipped: list[dict[str, Any]] = []

    for pid in payload.platform_ids:
        if moderation.approve_platform(store, pid):
            approved += 1
            continue

        if store.last_error:
            skipped.append({"id": str(pid), "state": None, "reason": store.last_error})
            continue
        p = store.fetch_platform(pid)
        if p is None:
            skipped.append({"id": str(pid), "state": None, "reason": "Platform not found"})
        else:
            skipped.append({"id": str(pid), "state": platform_state(p.approved), "reason": "Invalid transition"})

    return {"approved": approved, "skipped": len(skipped), "skipped_items": skipped}


@router.post("/platforms/{platform_id}/approve", response_model=TransitionResult)
def approve_platform(platform_id: uuid.UUID, store: PlatformStore = Depends(get_store)):
    if not moderation.approve_platform(store, platform_id):
        _platform_conflict(store, platform_id)
    return {"id": platform_id, "state": "APPROVED"}


@router.delete("/platforms/{platform_id}", response_model=TransitionResult)
def delete_platform(platform_id: uuid.UUID, store: PlatformStore = Depends(get_store)):
    if not moderation.delete_platform(store, platform_id):
        raise_store_failure(store, "Platform not found")
    return {"id": platform_id, "state": "DELETED"}


@router.get("/reviews/flagged", response_model=list[FlaggedReviewOut])
def flagged_reviews(store: PlatformStore = Depends(get_store)):
    items = moderation.list_flagged_reviews(store)
    if store.last_error:
        raise_store_failure(store)
    return items


@router.post("/reviews/{review_id}/approve", response_model=TransitionResult)
def approve_review(review_id: uuid.UUID, store: PlatformStore = Depends(get_store)):
    if not moderation.approve_review(store, review_id):
        _review_conflict(store, review_id)
    return {"id": review_id, "state": "APPROVED"}


@router.post("/reviews/{review_id}/reject", response_model=TransitionResult)
def reject_review(review_id: uuid.UUID, store: PlatformStore = Depends(get_store)):
    if not moderation.reject_review(store, review_id):
        _review_conflict(store, review_id)
    return {"id": review_id, "state": "REJECTED"}


@router.post("/tags", status_code=201)
def add_predefined_tag(payload: TagCreate, store: PlatformStore = Depends(get_store)):
    name = store.add_predefined_tag(payload.name)
    if not name:
        if store.last_error:
            raise_store_failure(store)
        raise HTTPException(status_code=400, detail="Tag name is required")
    return {"name": name}
