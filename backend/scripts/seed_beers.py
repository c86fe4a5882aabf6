"""
Seed a small catalogue of beers.

Run locally:
  PYTHONPATH=backend python backend/scripts/seed_beers.py

It uses the same DATABASE_* env vars as the backend (dotenv supported by core.config).
Beers whose name already exists are skipped.
"""

from __future__ import annotations

import asyncio

import structlog

from core.errors import ErrorKind
from core.logging import configure_logging
from db.beer import BeerType
from db.database import async_session_maker, create_db_and_tables
from schemas.beer import BeerCreate
from services.beer_service import BeerService

logger = structlog.get_logger(__name__)


SEED_BEERS: list[BeerCreate] = [
    BeerCreate(name="Brahma", brand="Ambev", max=50, quantity=10, type=BeerType.LAGER),
    BeerCreate(name="Colorado Appia", brand="Colorado", max=30, quantity=12, type=BeerType.WITBIER),
    BeerCreate(name="Baden Baden Weiss", brand="Baden Baden", max=25, quantity=5, type=BeerType.WEISS),
    BeerCreate(name="Eisenbahn Pale Ale", brand="Eisenbahn", max=40, quantity=20, type=BeerType.ALE),
    BeerCreate(name="Goose Island IPA", brand="Goose Island", max=60, quantity=35, type=BeerType.IPA),
    BeerCreate(name="Guinness Draught", brand="Guinness", max=45, quantity=0, type=BeerType.STOUT),
    BeerCreate(name="Brahma Malzbier", brand="Ambev", max=20, quantity=8, type=BeerType.MALZBIER),
]


async def seed(beers: list[BeerCreate] = SEED_BEERS, session_maker=async_session_maker) -> tuple[int, int]:
    """Insert the given beers, returning (created, skipped)."""
    created = 0
    skipped = 0
    async with session_maker() as db:
        service = BeerService.for_session(db)
        for beer in beers:
            result = await service.create(beer)
            if result.is_ok:
                created += 1
            elif result.error.kind == ErrorKind.DUPLICATE_NAME:
                skipped += 1
            else:
                raise RuntimeError(result.error.message)
    return created, skipped


async def main() -> None:
    configure_logging()
    await create_db_and_tables()
    created, skipped = await seed()
    logger.info("beers_seeded", created=created, skipped=skipped)


if __name__ == "__main__":
    asyncio.run(main())
