"""Domain models for recipe confirmation results."""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class InventoryUpdate:
    """Change applied to one inventory item."""

    product_name: str
    previous_quantity: Decimal
    used_quantity: Decimal
    new_quantity: Decimal
    unit: str


@dataclass(frozen=True)
class Shortage:
    """Ingredient whose stock is below the aggregated demand."""

    name: str
    required: Decimal
    available: Decimal
    unit: str = ""


@dataclass(frozen=True)
class ConfirmationResult:
    """Outcome of a successful recipe confirmation."""

    success: bool
    message: str
    confirmed_recipe_count: int
    inventory_updates: list[InventoryUpdate] = field(default_factory=list)
