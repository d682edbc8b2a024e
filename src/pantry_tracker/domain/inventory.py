"""Domain models for the food inventory."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from uuid import UUID


def name_key(name: str) -> str:
    """Return the case-insensitive lookup key for an item or ingredient name."""
    return name.casefold()


@dataclass
class FoodItem:
    """A food item owned by a user.

    Quantity is mutated in place when recipes are confirmed.
    """

    id: UUID
    user_id: UUID
    name: str
    quantity: Decimal
    unit: str
    expires_at: datetime | None = None

    @property
    def key(self) -> str:
        return name_key(self.name)


@dataclass(frozen=True)
class QuantityChange:
    """New quantity for an item, guarded by the quantity it was read with."""

    item_id: UUID
    user_id: UUID
    previous_quantity: Decimal
    new_quantity: Decimal
