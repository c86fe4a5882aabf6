import enum

from sqlalchemy import CheckConstraint, Column, Enum, Integer, String

from .database import Base


class BeerType(str, enum.Enum):
    LAGER = "LAGER"
    MALZBIER = "MALZBIER"
    WITBIER = "WITBIER"
    WEISS = "WEISS"
    ALE = "ALE"
    IPA = "IPA"
    STOUT = "STOUT"


class Beer(Base):
    __tablename__ = "beers"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_beers_quantity_non_negative"),
        CheckConstraint("quantity <= max", name="ck_beers_quantity_within_max"),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(200), nullable=False, unique=True, index=True)
    brand = Column(String(200), nullable=False)
    max = Column(Integer, nullable=False)
    quantity = Column(Integer, nullable=False, default=0)
    # Stored by symbolic name (LAGER, IPA, ...)
    type = Column(Enum(BeerType, name="beer_type", native_enum=False, length=20), nullable=False)

    @property
    def to_schema(self):
        return {
            "id": self.id,
            "name": self.name,
            "brand": self.brand,
            "max": self.max,
            "quantity": self.quantity,
            "type": self.type.name if self.type is not None else None,
        }
