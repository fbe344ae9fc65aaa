from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.services.store import PlatformStore


def get_store(db: Session = Depends(get_db)) -> PlatformStore:
    return PlatformStore(db)


def raise_store_failure(store: PlatformStore, not_found: str = "Not found"):
    """Map a failed store call to 503 (store error) or 404 (missing row)."""
    if store.last_error:
        raise HTTPException(status_code=503, detail="Directory store unavailable, please retry")
    raise HTTPException(status_code=404, detail=not_found)
