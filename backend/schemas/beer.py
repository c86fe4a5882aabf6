from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from db.beer import BeerType


class BeerCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    brand: str = Field(min_length=1, max_length=200)
    max: int = Field(ge=0)
    quantity: int = Field(ge=0, le=100)
    type: BeerType

    @field_validator("name", "brand", mode="before")
    @classmethod
    def _strip_required(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v

    @model_validator(mode="after")
    def _quantity_within_max(self):
        if self.quantity > self.max:
            raise ValueError("quantity must not exceed max")
        return self


class BeerRead(BaseModel):
    id: int
    name: str
    brand: str
    max: int
    quantity: int
    type: BeerType

    model_config = ConfigDict(from_attributes=True)


class QuantityChange(BaseModel):
    quantity: int = Field(ge=1, le=100)
