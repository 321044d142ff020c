"""Seed the database with the Fresh Fusion demo restaurant.

Usage: python -m marketplace.scripts.seed [path/to/seed.yaml]
"""
import asyncio
import logging
import sys
import yaml
from pathlib import Path
from typing import Dict, Optional

from marketplace.core.logging import setup_logging
from marketplace.db.database import AsyncSessionLocal, init_db
from marketplace.services.identity.accounts import hash_password
from marketplace.services.persistence.base import DocumentStore
from marketplace.services.persistence.sql_store import SqlAlchemyDocumentStore

logger = logging.getLogger(__name__)

DEFAULT_SEED_FILE = Path(__file__).parent.parent / "db" / "data" / "seed.yaml"

# YAML section -> collection
SECTIONS = {
    "users": "users",
    "restaurants": "restaurants",
    "menu_items": "menuItems",
}


async def load_seed_data(store: DocumentStore, seed_file: Optional[Path] = None) -> Dict[str, int]:
    """Insert seed documents that are not already present. Returns inserted counts."""
    seed_file = Path(seed_file or DEFAULT_SEED_FILE)
    with open(seed_file, "r") as f:
        data = yaml.safe_load(f) or {}

    inserted = {}
    for section, collection in SECTIONS.items():
        inserted[collection] = 0
        for doc in data.get(section, []):
            if await store.get(collection, doc["id"]):
                continue
            doc = dict(doc)
            if collection == "users":
                doc["password_hash"] = hash_password(doc.pop("password"))
                doc["display_name"] = f"{doc.get('first_name', '')} {doc.get('last_name', '')}".strip()
            await store.insert(collection, doc)
            inserted[collection] += 1

    logger.info(f"[SEED] Loaded {seed_file.name}: {inserted}")
    return inserted


async def main(seed_file: Optional[str] = None) -> None:
    """Create tables and load seed data."""
    setup_logging()
    await init_db()
    async with AsyncSessionLocal() as session:
        await load_seed_data(SqlAlchemyDocumentStore(session), seed_file)


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else None))
