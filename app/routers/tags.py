from fastapi import APIRouter, Depends

from app.dependencies import get_store, raise_store_failure
from app.services.store import PlatformStore

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("", response_model=list[str])
def list_tags(store: PlatformStore = Depends(get_store)):
    tags = store.all_tags()
    if store.last_error:
        raise_store_failure(store)
    return tags


@router.get("/predefined", response_model=list[str])
def predefined(store: PlatformStore = Depends(get_store)):
    tags = store.predefined_tags()
    if store.last_error:
        raise_store_failure(store)
    return tags
