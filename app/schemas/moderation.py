import uuid
from typing import List

from pydantic import BaseModel, Field


class BulkPlatformApproveRequest(BaseModel):
    platform_ids: List[uuid.UUID] = Field(min_length=1)


class SkippedItem(BaseModel):
    id: str
    state: str | None
    reason: str


class BulkPlatformApproveResult(BaseModel):
    approved: int
    skipped: int
    skipped_items: List[SkippedItem]


class TransitionResult(BaseModel):
    id: uuid.UUID
    state: str
