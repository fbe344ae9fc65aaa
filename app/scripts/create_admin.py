import sys

from app.database import Base, SessionLocal, engine
import app.models  # noqa: F401  registers every table for create_all
from app.models.admin import Admin
from app.services.tokens import hash_token, new_token


def create_admin(db, label: str) -> str:
    token = new_token()
    db.add(Admin(label=label, token_hash=hash_token(token)))
    db.commit()
    return token


def main():
    label = sys.argv[1] if len(sys.argv) > 1 else "admin"
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        token = create_admin(db, label)
        print(f"admin '{label}' created; token (shown once): {token}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
