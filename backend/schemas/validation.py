"""
Explicit request validation.

Routers pass raw JSON bodies through these functions before anything reaches
the service. Each returns either the typed command or a list of field errors,
never both.
"""

from typing import Any, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from core.errors import FieldError
from schemas.beer import BeerCreate, QuantityChange

M = TypeVar("M", bound=BaseModel)


def _field_name(loc) -> str:
    parts = [str(p) for p in loc if p not in ("body", "path", "query")]
    return ".".join(parts) or "__root__"


def _message(err: dict) -> str:
    msg = err.get("msg") or "invalid value"
    # pydantic prefixes model-level ValueErrors
    if msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    return msg


def field_errors_from(exc: ValidationError) -> List[FieldError]:
    return [FieldError(field=_field_name(e.get("loc", ())), message=_message(e)) for e in exc.errors()]


def _validate(model: Type[M], payload: Any) -> Tuple[Optional[M], List[FieldError]]:
    if not isinstance(payload, dict):
        return None, [FieldError(field="__root__", message="request body must be a JSON object")]
    try:
        return model.model_validate(payload), []
    except ValidationError as e:
        return None, field_errors_from(e)


def validate_beer_input(payload: Any) -> Tuple[Optional[BeerCreate], List[FieldError]]:
    return _validate(BeerCreate, payload)


def validate_quantity_input(payload: Any) -> Tuple[Optional[QuantityChange], List[FieldError]]:
    return _validate(QuantityChange, payload)
