import hashlib
import secrets
from datetime import datetime, timezone


def new_token() -> str:
    return secrets.token_urlsafe(32)


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def utcnow():
    # naive UTC, the DateTime columns are timezone-less
    return datetime.now(timezone.utc).replace(tzinfo=None)
