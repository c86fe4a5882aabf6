from typing import Dict

from db.beer import Beer
from schemas.beer import BeerCreate, BeerRead


def model_to_schema(beer_model: Beer) -> BeerRead:
    """Convert SQLAlchemy model to the transfer object"""
    return BeerRead(**beer_model.to_schema)


def schema_to_model_data(beer_schema: BeerCreate) -> Dict:
    """Convert Pydantic schema to dict for model creation"""
    return {
        "name": beer_schema.name,
        "brand": beer_schema.brand,
        "max": beer_schema.max,
        "quantity": beer_schema.quantity,
        "type": beer_schema.type,
    }


def schema_to_model(beer_schema: BeerCreate) -> Beer:
    return Beer(**schema_to_model_data(beer_schema))

