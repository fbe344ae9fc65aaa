import json
import logging
from pathlib import Path

from sqlalchemy import select

from app.database import Base, SessionLocal, engine
from app.logging_setup import configure_logging
from app.models.platform import Platform
from app.schemas.platform import PlatformCreate
from app.services.moderation import approve_platform
from app.services.store import PlatformStore
from app.utils.constants import PREDEFINED_TAGS

logger = logging.getLogger(__name__)

SEED_FILE = Path(__file__).with_name("seed_data.json")


def seed(store: PlatformStore, entries: list[dict]) -> dict:
    """Insert and approve every entry whose name is not in the directory yet."""
    tags = sum(1 for name in PREDEFINED_TAGS if store.add_predefined_tag(name))

    existing = set(store.db.execute(select(Platform.name)).scalars().all())
    created = 0
    for entry in entries:
        if entry["name"] in existing:
            continue
        p = store.insert_platform(PlatformCreate(**entry))
        if p and approve_platform(store, p.id):
            created += 1
        else:
            logger.warning("could not seed %s", entry["name"])
    return {"platforms_created": created, "predefined_tags": tags}


def main():
    configure_logging()
    Base.metadata.create_all(bind=engine)
    entries = json.loads(SEED_FILE.read_text(encoding="utf-8"))["platforms"]

    db = SessionLocal()
    try:
        res = seed(PlatformStore(db), entries)
        print(res)
    finally:
        db.close()


if __name__ == "__main__":
    main()
