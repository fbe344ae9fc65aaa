import uuid

from fastapi import APIRouter, Depends, HTTPException

from app.dependencies import get_store, raise_store_failure
from app.services.moderation import flag_review
from app.services.store import PlatformStore

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.post("/{review_id}/flag")
def flag(review_id: uuid.UUID, store: PlatformStore = Depends(get_store)):
    if not flag_review(store, review_id):
        if store.last_error:
            raise_store_failure(store)
        if store.fetch_review(review_id) is None:
            raise HTTPException(status_code=404, detail="Review not found")
        raise HTTPException(status_code=409, detail="Review cannot be flagged")
    return {"id": str(review_id), "flagged": True}
