from fastapi import Depends, HTTPException, Request
from sqlalchemy import select
from sqlalchemy.orm import Session as DbSession

from app.config import ADMIN_TOKEN_HEADER
from app.database import get_db
from app.models.admin import Admin
from app.services.tokens import hash_token


def _bearer(req: Request) -> str | None:
    raw = req.headers.get(ADMIN_TOKEN_HEADER)
    if raw:
        return raw.strip()
    auth = req.headers.get("authorization", "")
    if auth.lower().startswith("bearer "):
        return auth[7:].strip()
    return None


def get_current_admin(req: Request, db: DbSession):
    raw = _bearer(req)
    if not raw:
        raise HTTPException(status_code=401, detail="Not authenticated")

    admin = db.execute(
        select(Admin).where(Admin.token_hash == hash_token(raw), Admin.revoked_at.is_(None))
    ).scalars().first()
    if not admin:
        raise HTTPException(status_code=403, detail="Admin only")
    return admin


def require_admin(req: Request, db: DbSession = Depends(get_db)):
    return get_current_admin(req, db)
