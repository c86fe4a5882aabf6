from typing import List, Optional

from sqlalchemy import and_, delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .beer import Beer


class BeerRepository:
    """Async persistence for beers, keyed by id with a secondary lookup by name."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def save(self, beer: Beer) -> Beer:
        # Insert new rows, overwrite existing ones by id
        if beer.id is not None:
            beer = await self.db.merge(beer)
        else:
            self.db.add(beer)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise
        await self.db.refresh(beer)
        return beer

    async def find_by_name(self, name: str) -> Optional[Beer]:
        result = await self.db.execute(select(Beer).where(Beer.name == name))
        return result.scalar_one_or_none()

    async def find_by_id(self, beer_id: int, refresh: bool = False) -> Optional[Beer]:
        stmt = select(Beer).where(Beer.id == beer_id)
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def find_all(self) -> List[Beer]:
        result = await self.db.execute(select(Beer).order_by(Beer.id))
        return list(result.scalars().all())

    async def delete_by_id(self, beer_id: int) -> None:
        await self.db.execute(delete(Beer).where(Beer.id == beer_id))
        await self.db.commit()

    async def change_quantity(self, beer_id: int, delta: int) -> Optional[Beer]:
        """Add ``delta`` to the stock of one beer only if the result stays within [0, max].

        The bound check and the write are a single UPDATE, so concurrent changes
        to the same beer never overwrite each other with a stale quantity.
        Returns the updated beer, or None (and changes nothing) when the beer is
        missing or the bound would be violated.
        """
        new_quantity = Beer.quantity + delta
        stmt = (
            update(Beer)
            .where(
                and_(
                    Beer.id == beer_id,
                    new_quantity >= 0,
                    new_quantity <= Beer.max,
                )
            )
            .values(quantity=new_quantity)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        await self.db.commit()
        if int(getattr(result, "rowcount", 0) or 0) != 1:
            return None
        return await self.find_by_id(beer_id, refresh=True)
