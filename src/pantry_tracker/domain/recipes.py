"""Domain models for generated recipes."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from uuid import UUID


class DishType(str, Enum):
    """Kind of dish a recipe produces."""

    SALAD = "salad"
    SOUP = "soup"
    MAIN_COURSE = "main_course"
    DESSERT = "dessert"
    APPETIZER = "appetizer"


@dataclass(frozen=True)
class Ingredient:
    """Ingredient and required portion."""

    name: str
    quantity: Decimal
    unit: str


@dataclass(frozen=True)
class Recipe:
    """A generated recipe owned by a user."""

    id: UUID
    user_id: UUID
    title: str
    description: str
    dish_type: DishType
    ingredients: list[Ingredient] = field(default_factory=list)


@dataclass(frozen=True)
class DemandLine:
    """Aggregated quantity of one ingredient across recipes."""

    name: str
    quantity: Decimal
