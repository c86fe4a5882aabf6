from fastapi import APIRouter, Body, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, Dict, List

from core.errors import ErrorKind, Result, StockError
from db.database import get_async_session
from schemas.beer import BeerRead
from schemas.validation import validate_beer_input, validate_quantity_input
from services.beer_service import BeerService

router = APIRouter()


def get_beer_service(db: AsyncSession = Depends(get_async_session)) -> BeerService:
    return BeerService.for_session(db)


def error_detail(error: StockError):
    if error.kind == ErrorKind.INVALID_INPUT:
        return {"message": error.message, "errors": [e.to_dict() for e in error.field_errors]}
    return error.message


def unwrap(result: Result):
    """Return the value of a successful result or raise the matching HTTP error"""
    if not result.is_ok:
        raise HTTPException(status_code=result.error.status_code, detail=error_detail(result.error))
    return result.value


def _reject_invalid(errors) -> None:
    if errors:
        unwrap(Result.fail(StockError.invalid_input(errors)))


@router.post("", response_model=BeerRead, status_code=status.HTTP_201_CREATED)
async def create_beer(payload: Dict[str, Any] = Body(...), service: BeerService = Depends(get_beer_service)):
    """Register a new beer; names must be unique"""
    beer_in, errors = validate_beer_input(payload)
    _reject_invalid(errors)
    return unwrap(await service.create(beer_in))


@router.get("", response_model=List[BeerRead])
async def list_beers(service: BeerService = Depends(get_beer_service)):
    """List all beers"""
    return unwrap(await service.list_all())


@router.get("/{name}", response_model=BeerRead)
async def get_beer_by_name(name: str, service: BeerService = Depends(get_beer_service)):
    """Get a beer by name"""
    return unwrap(await service.find_by_name(name))


@router.delete("/{beer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_beer(beer_id: int, service: BeerService = Depends(get_beer_service)):
    """Delete a beer by id"""
    unwrap(await service.delete_by_id(beer_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{beer_id}/increment", response_model=BeerRead)
async def increment_beer(
    beer_id: int,
    payload: Dict[str, Any] = Body(...),
    service: BeerService = Depends(get_beer_service),
):
    """Add stock to a beer without exceeding its max"""
    change, errors = validate_quantity_input(payload)
    _reject_invalid(errors)
    return unwrap(await service.increment(beer_id, change.quantity))


@router.patch("/{beer_id}/decrement", response_model=BeerRead)
async def decrement_beer(
    beer_id: int,
    payload: Dict[str, Any] = Body(...),
    service: BeerService = Depends(get_beer_service),
):
    """Remove stock from a beer without going below zero"""
    change, errors = validate_quantity_input(payload)
    _reject_invalid(errors)
    return unwrap(await service.decrement(beer_id, change.quantity))
