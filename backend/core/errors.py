"""Domain error kinds and the tagged result returned by the service layer.

The service never raises for expected failures (duplicate name, missing beer,
stock bound violations). It returns a ``Result`` carrying either the value or a
``StockError``; the router maps ``StockError.kind`` to an HTTP status.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, List, Optional, TypeVar

from fastapi import status

T = TypeVar("T")


class ErrorKind(str, Enum):
    DUPLICATE_NAME = "DUPLICATE_NAME"
    NOT_FOUND = "NOT_FOUND"
    STOCK_EXCEEDED = "STOCK_EXCEEDED"
    NEGATIVE_STOCK = "NEGATIVE_STOCK"
    INVALID_INPUT = "INVALID_INPUT"


HTTP_STATUS_BY_KIND = {
    ErrorKind.DUPLICATE_NAME: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.STOCK_EXCEEDED: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NEGATIVE_STOCK: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
}


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class StockError:
    kind: ErrorKind
    message: str
    field_errors: List[FieldError] = field(default_factory=list)

    @property
    def status_code(self) -> int:
        return HTTP_STATUS_BY_KIND[self.kind]

    @classmethod
    def duplicate_name(cls, name: str) -> "StockError":
        return cls(ErrorKind.DUPLICATE_NAME, f"Beer with name {name} already registered in the system.")

    @classmethod
    def name_not_found(cls, name: str) -> "StockError":
        return cls(ErrorKind.NOT_FOUND, f"Beer with name {name} not found in the system.")

    @classmethod
    def id_not_found(cls, beer_id: int) -> "StockError":
        return cls(ErrorKind.NOT_FOUND, f"Beer with id {beer_id} not found in the system.")

    @classmethod
    def stock_exceeded(cls, beer_id: int, amount: int) -> "StockError":
        return cls(
            ErrorKind.STOCK_EXCEEDED,
            f"Beers with {beer_id} ID informed exceeds the max stock capacity to increment: {amount}",
        )

    @classmethod
    def negative_stock(cls, beer_id: int, quantity: int, amount: int) -> "StockError":
        return cls(
            ErrorKind.NEGATIVE_STOCK,
            f"Beer with {beer_id} ID has {quantity} in stock and cannot be decremented by {amount}",
        )

    @classmethod
    def invalid_input(cls, field_errors: List[FieldError]) -> "StockError":
        return cls(ErrorKind.INVALID_INPUT, "Invalid input", list(field_errors))


@dataclass(frozen=True)
class Result(Generic[T]):
    value: Optional[T] = None
    error: Optional[StockError] = None

    @classmethod
    def ok(cls, value: T = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, error: StockError) -> "Result[T]":
        return cls(error=error)

    @property
    def is_ok(self) -> bool:
        return self.error is None
