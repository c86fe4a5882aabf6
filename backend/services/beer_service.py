"""
Beer stock domain rules: unique names, existence checks and the [0, max]
stock bound. Every operation returns a ``Result``; expected failures are
reported as ``StockError`` values, not raised.
"""

from typing import List

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.converters import model_to_schema, schema_to_model
from core.errors import FieldError, Result, StockError
from db.repository import BeerRepository
from schemas.beer import BeerCreate, BeerRead

logger = structlog.get_logger(__name__)


class BeerService:
    def __init__(self, repository: BeerRepository):
        self.repository = repository

    @classmethod
    def for_session(cls, db: AsyncSession) -> "BeerService":
        return cls(BeerRepository(db))

    async def create(self, beer_in: BeerCreate) -> Result[BeerRead]:
        if await self.repository.find_by_name(beer_in.name) is not None:
            return self._reject("create", StockError.duplicate_name(beer_in.name), name=beer_in.name)

        try:
            saved = await self.repository.save(schema_to_model(beer_in))
        except IntegrityError:
            # Another request inserted the same name after our lookup
            if await self.repository.find_by_name(beer_in.name) is None:
                raise
            return self._reject(
                "create", StockError.duplicate_name(beer_in.name), name=beer_in.name, concurrent=True
            )
        logger.info("beer_created", beer_id=saved.id, name=saved.name, quantity=saved.quantity, max=saved.max)
        return Result.ok(model_to_schema(saved))

    async def find_by_name(self, name: str) -> Result[BeerRead]:
        beer = await self.repository.find_by_name(name)
        if beer is None:
            return self._reject("find_by_name", StockError.name_not_found(name), name=name)
        return Result.ok(model_to_schema(beer))

    async def list_all(self) -> Result[List[BeerRead]]:
        beers = await self.repository.find_all()
        return Result.ok([model_to_schema(b) for b in beers])

    async def delete_by_id(self, beer_id: int) -> Result[None]:
        if await self.repository.find_by_id(beer_id) is None:
            return self._reject("delete", StockError.id_not_found(beer_id), beer_id=beer_id)

        await self.repository.delete_by_id(beer_id)
        logger.info("beer_deleted", beer_id=beer_id)
        return Result.ok(None)

    async def increment(self, beer_id: int, amount: int) -> Result[BeerRead]:
        if amount < 1:
            return self._reject_amount("increment", beer_id, amount)

        beer = await self.repository.find_by_id(beer_id, refresh=True)
        if beer is None:
            return self._reject("increment", StockError.id_not_found(beer_id), beer_id=beer_id)

        if beer.quantity + amount > beer.max:
            return self._reject(
                "increment", StockError.stock_exceeded(beer_id, amount),
                beer_id=beer_id, quantity=beer.quantity, max=beer.max, amount=amount,
            )

        updated = await self.repository.change_quantity(beer_id, amount)
        if updated is None:
            return await self._lost_race("increment", beer_id, amount)

        logger.info("beer_incremented", beer_id=beer_id, amount=amount, quantity=updated.quantity)
        return Result.ok(model_to_schema(updated))

    async def decrement(self, beer_id: int, amount: int) -> Result[BeerRead]:
        if amount < 1:
            return self._reject_amount("decrement", beer_id, amount)

        beer = await self.repository.find_by_id(beer_id, refresh=True)
        if beer is None:
            return self._reject("decrement", StockError.id_not_found(beer_id), beer_id=beer_id)

        if beer.quantity - amount < 0:
            return self._reject(
                "decrement", StockError.negative_stock(beer_id, beer.quantity, amount),
                beer_id=beer_id, quantity=beer.quantity, amount=amount,
            )

        updated = await self.repository.change_quantity(beer_id, -amount)
        if updated is None:
            return await self._lost_race("decrement", beer_id, amount)

        logger.info("beer_decremented", beer_id=beer_id, amount=amount, quantity=updated.quantity)
        return Result.ok(model_to_schema(updated))

    async def _lost_race(self, operation: str, beer_id: int, amount: int) -> Result[BeerRead]:
        # The guarded update matched no row: the beer was deleted or its stock
        # moved between our read and the write.
        current = await self.repository.find_by_id(beer_id, refresh=True)
        if current is None:
            error = StockError.id_not_found(beer_id)
        elif operation == "increment":
            error = StockError.stock_exceeded(beer_id, amount)
        else:
            error = StockError.negative_stock(beer_id, current.quantity, amount)
        return self._reject(operation, error, beer_id=beer_id, amount=amount, concurrent=True)

    def _reject_amount(self, operation: str, beer_id: int, amount: int) -> Result[BeerRead]:
        error = StockError.invalid_input([FieldError("quantity", "must be greater than or equal to 1")])
        return self._reject(operation, error, beer_id=beer_id, amount=amount)

    @staticmethod
    def _reject(operation: str, error: StockError, **context) -> Result:
        logger.warning("beer_operation_rejected", operation=operation, kind=error.kind.value, **context)
        return Result.fail(error)
