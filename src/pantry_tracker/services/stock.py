"""Sufficiency checks of ingredient demand against inventory."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from pantry_tracker.domain.confirmation import Shortage
from pantry_tracker.domain.errors import (
    IngredientsInsufficientError,
    IngredientsMissingError,
)
from pantry_tracker.domain.inventory import FoodItem
from pantry_tracker.domain.recipes import DemandLine

_logger = logging.getLogger(__name__)


@dataclass
class StockCheck:
    """Result of comparing demand against resolved inventory."""

    lookup: dict[str, FoodItem]
    missing: list[str] = field(default_factory=list)
    insufficient: list[Shortage] = field(default_factory=list)

    @property
    def sufficient(self) -> bool:
        return not self.missing and not self.insufficient

    def raise_for_shortage(self) -> dict[str, FoodItem]:
        """Raise the matching error if stock is short, else return the lookup."""
        if self.missing:
            raise IngredientsMissingError(self.missing)
        if self.insufficient:
            raise IngredientsInsufficientError(self.insufficient)
        return self.lookup


def build_lookup(stock: Iterable[FoodItem]) -> dict[str, FoodItem]:
    """Index inventory items by case-insensitive name."""
    lookup: dict[str, FoodItem] = {}
    for item in stock:
        if item.key in lookup:
            _logger.warning(
                "Duplicate inventory item name %s for user %s; keeping first",
                item.name,
                item.user_id,
            )
            continue
        lookup[item.key] = item
    return lookup


def check_stock(
    demand: dict[str, DemandLine], stock: Iterable[FoodItem]
) -> StockCheck:
    """Classify every demanded ingredient as missing, insufficient or covered."""
    result = StockCheck(lookup=build_lookup(stock))
    for key, line in demand.items():
        item = result.lookup.get(key)
        if item is None:
            result.missing.append(line.name)
        elif item.quantity < line.quantity:
            result.insufficient.append(
                Shortage(
                    name=line.name,
                    required=line.quantity,
                    available=item.quantity,
                    unit=item.unit,
                )
            )
    return result
